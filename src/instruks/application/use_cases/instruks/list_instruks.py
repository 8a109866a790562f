"""List instruks use cases."""

from uuid import UUID

from instruks.domain.entities import Instruks
from instruks.domain.exceptions import NotFound


class ListInstruksUseCase:
    """List latest versions, optionally limited to one category."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, category_id: UUID | None = None) -> list[Instruks]:
        async with self._uow_factory() as uow:
            if category_id is None:
                return await uow.instruks.list_latest()
            return await uow.instruks.list_latest_by_category(category_id)


class ListInstruksVersionsUseCase:
    """List the full version history of a document, oldest first."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, document_id: UUID) -> list[Instruks]:
        async with self._uow_factory() as uow:
            versions = await uow.instruks.list_versions(document_id)
        if not versions:
            raise NotFound("Document", str(document_id))
        return versions
