"""Create new instruks version use case."""

import logging
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

from instruks.application.dto.current_user import CurrentUser
from instruks.application.dto.instruks_dto import InstruksInput
from instruks.application.ports import HtmlSanitizer, PermissionChecker
from instruks.application.use_cases.instruks.category_guard import ensure_category_exists
from instruks.application.use_cases.instruks.content_guard import sanitize_content
from instruks.domain.entities import Instruks
from instruks.domain.exceptions import Conflict, NotFound, PermissionDenied
from instruks.domain.value_objects import PermissionAction

logger = logging.getLogger(__name__)


class CreateInstruksVersionUseCase:
    """Branch a new latest version off the current latest one.

    The source row is locked for the duration of the transaction; demoting it and
    inserting the successor either both happen or neither does.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        sanitizer: HtmlSanitizer,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._sanitizer = sanitizer

    async def execute(
        self, user: CurrentUser, source_id: UUID, data: InstruksInput
    ) -> Instruks:
        """Demote source and insert version source.version_number + 1."""
        has_write = await self._permission_checker.check(user, PermissionAction.WRITE)
        if not has_write:
            raise PermissionDenied("User is not allowed to create instruks versions")

        content = sanitize_content(self._sanitizer, data.content)

        async with self._uow_factory() as uow:
            source = await uow.instruks.get_by_id(source_id, for_update=True)
            if source is None:
                raise NotFound("Instruks", str(source_id))
            if not source.is_latest:
                raise Conflict(
                    f"Instruks {source_id} is not the latest version of document {source.document_id}"
                )

            await ensure_category_exists(uow, data.category_id)

            now = datetime.now(UTC)
            # Demote first: at most one latest row per document at any time.
            await uow.instruks.update(replace(source, is_latest=False))
            new_version = Instruks(
                id=uuid4(),
                document_id=source.document_id,
                version_number=source.version_number + 1,
                is_latest=True,
                title=data.title,
                description=data.description,
                content=content,
                category_id=data.category_id,
                created_at=now,
                updated_at=now,
                previous_version_id=source.id,
            )
            await uow.instruks.create(new_version)

        logger.info(
            "Created version %d of document %s (instruks %s) by %s",
            new_version.version_number,
            new_version.document_id,
            new_version.id,
            user.user_id,
        )
        return new_version
