"""Get instruks use cases."""

from uuid import UUID

from instruks.domain.entities import Instruks
from instruks.domain.exceptions import NotFound


class GetInstruksUseCase:
    """Get a single version by its id."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, instruks_id: UUID) -> Instruks:
        async with self._uow_factory() as uow:
            instruks = await uow.instruks.get_by_id(instruks_id)
        if instruks is None:
            raise NotFound("Instruks", str(instruks_id))
        return instruks


class GetLatestInstruksUseCase:
    """Get the latest version of a document."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, document_id: UUID) -> Instruks:
        async with self._uow_factory() as uow:
            instruks = await uow.instruks.get_latest_by_document_id(document_id)
        if instruks is None:
            raise NotFound("Document", str(document_id))
        return instruks
