"""Instruks repository port."""

from typing import Protocol
from uuid import UUID

from instruks.domain.entities import Instruks


class InstruksRepository(Protocol):
    """Port for instruks version persistence."""

    async def get_by_id(self, instruks_id: UUID, for_update: bool = False) -> Instruks | None: ...

    async def get_latest_by_document_id(self, document_id: UUID) -> Instruks | None: ...

    async def get_successor(self, instruks_id: UUID) -> Instruks | None: ...

    async def list_latest(self) -> list[Instruks]: ...

    async def list_latest_by_category(self, category_id: UUID) -> list[Instruks]: ...

    async def list_versions(self, document_id: UUID) -> list[Instruks]: ...

    async def create(self, instruks: Instruks) -> Instruks: ...

    async def update(self, instruks: Instruks) -> None: ...

    async def delete(self, instruks_id: UUID) -> None: ...
