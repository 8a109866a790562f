"""Domain value objects."""

from instruks.domain.value_objects.permission_action import PermissionAction
from instruks.domain.value_objects.user_role import UserRole

__all__ = [
    "PermissionAction",
    "UserRole",
]
