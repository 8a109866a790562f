"""Permission actions for role-based access."""

from enum import StrEnum


class PermissionAction(StrEnum):
    """Actions that can be performed on instruks."""

    READ = "read"
    WRITE = "write"
    DELETE = "delete"
