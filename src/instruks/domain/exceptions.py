"""Domain exceptions."""


class InstruksError(Exception):
    """Base exception for Instruks."""

    pass


class PermissionDenied(InstruksError):
    """User does not have permission for the requested action."""

    pass


class NotFound(InstruksError):
    """Requested resource was not found."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ValidationError(InstruksError):
    """Validation failed for input data."""

    pass


class Conflict(InstruksError):
    """Operation conflicts with the current state of a document series."""

    pass
