"""Permission checker implementation - maps realm roles to actions."""

from instruks.application.dto.current_user import CurrentUser
from instruks.domain.value_objects import PermissionAction

_NURSE_ACTIONS = frozenset({PermissionAction.READ})
_DOCTOR_ACTIONS = frozenset(
    {PermissionAction.READ, PermissionAction.WRITE, PermissionAction.DELETE}
)


class RolePermissionChecker:
    """Doctors may read and change instruks; nurses may only read."""

    async def check(self, user: CurrentUser, action: PermissionAction) -> bool:
        """Check if user may perform action."""
        if user is None or not user.user_id:
            return False
        actions: frozenset[PermissionAction] = frozenset()
        if user.is_doctor:
            actions = actions | _DOCTOR_ACTIONS
        if user.is_nurse:
            actions = actions | _NURSE_ACTIONS
        return action in actions
