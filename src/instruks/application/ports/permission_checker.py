"""Permission checker port - role-based authorization."""

from typing import Protocol

from instruks.application.dto.current_user import CurrentUser
from instruks.domain.value_objects import PermissionAction


class PermissionChecker(Protocol):
    """Port for checking whether a caller may perform an action."""

    async def check(self, user: CurrentUser, action: PermissionAction) -> bool: ...
