"""Instruks entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Instruks:
    """One version of a procedural document.

    All versions of the same logical document share ``document_id``. Exactly one
    version per document has ``is_latest`` set; ``previous_version_id`` links a
    version to the one it superseded.
    """

    id: UUID
    document_id: UUID
    version_number: int
    is_latest: bool
    title: str
    content: str
    category_id: UUID
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    previous_version_id: UUID | None = None
