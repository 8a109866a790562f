"""Realm roles recognised by the API."""

from enum import StrEnum


class UserRole(StrEnum):
    """Roles carried in the access token."""

    DOCTOR = "Doctor"
    NURSE = "Nurse"
