"""Category entity."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class Category:
    """Category that groups instruks series. May have a parent category."""

    id: UUID
    name: str
    parent_id: UUID | None = None
