"""Authorization context DTO."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CurrentUser:
    """Caller identity and role flags resolved from the bearer token."""

    user_id: str | None
    is_doctor: bool = False
    is_nurse: bool = False
