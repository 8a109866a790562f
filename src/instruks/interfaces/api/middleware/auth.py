"""Auth middleware - resolves the bearer token into the caller's role flags."""

import asyncio

import falcon.asgi

from instruks.application.dto.current_user import CurrentUser
from instruks.domain.value_objects import UserRole


class AuthMiddleware:
    """Middleware that validates the bearer token and sets req.context.user.

    req.context.user is None for missing, malformed or inactive tokens.
    """

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract user from Authorization header."""
        req.context.user = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._keycloak:
            return
        # Introspection is a blocking HTTP call
        loop = asyncio.get_running_loop()
        oidc_user = await loop.run_in_executor(None, self._keycloak.decode_token, auth[7:])
        if oidc_user and oidc_user.user_id:
            roles = set(oidc_user.realm_roles)
            req.context.user = CurrentUser(
                user_id=oidc_user.user_id,
                is_doctor=UserRole.DOCTOR in roles,
                is_nurse=UserRole.NURSE in roles,
            )
