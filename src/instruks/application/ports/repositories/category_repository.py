"""Category repository port."""

from typing import Protocol
from uuid import UUID

from instruks.domain.entities import Category


class CategoryRepository(Protocol):
    """Port for category lookup."""

    async def get_by_id(self, category_id: UUID) -> Category | None: ...

    async def list(self) -> list[Category]: ...
