"""Delete instruks version use case."""

import logging
from dataclasses import replace
from uuid import UUID

from instruks.application.dto.current_user import CurrentUser
from instruks.application.ports import PermissionChecker
from instruks.domain.exceptions import PermissionDenied
from instruks.domain.value_objects import PermissionAction

logger = logging.getLogger(__name__)


class DeleteInstruksUseCase:
    """Delete a single version and keep the rest of the chain consistent.

    The successor (if any) is relinked to the deleted row's predecessor. When the
    latest version is deleted its predecessor becomes latest. Version numbers are
    left as they are.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user: CurrentUser, instruks_id: UUID) -> bool:
        """Delete version. Returns False if it does not exist."""
        has_delete = await self._permission_checker.check(user, PermissionAction.DELETE)
        if not has_delete:
            raise PermissionDenied("User is not allowed to delete instruks")

        async with self._uow_factory() as uow:
            target = await uow.instruks.get_by_id(instruks_id, for_update=True)
            if target is None:
                return False

            successor = await uow.instruks.get_successor(target.id)
            if successor is not None:
                await uow.instruks.update(
                    replace(successor, previous_version_id=target.previous_version_id)
                )

            await uow.instruks.delete(target.id)

            promoted = None
            if target.is_latest and target.previous_version_id is not None:
                predecessor = await uow.instruks.get_by_id(
                    target.previous_version_id, for_update=True
                )
                if predecessor is not None:
                    promoted = replace(predecessor, is_latest=True)
                    await uow.instruks.update(promoted)

        logger.info(
            "Deleted instruks %s (document %s, version %d) by %s",
            target.id,
            target.document_id,
            target.version_number,
            user.user_id,
        )
        if promoted is not None:
            logger.info("Promoted instruks %s to latest", promoted.id)
        return True
