"""Create instruks use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from instruks.application.dto.current_user import CurrentUser
from instruks.application.dto.instruks_dto import InstruksInput
from instruks.application.ports import HtmlSanitizer, PermissionChecker
from instruks.application.use_cases.instruks.category_guard import ensure_category_exists
from instruks.application.use_cases.instruks.content_guard import sanitize_content
from instruks.domain.entities import Instruks
from instruks.domain.exceptions import PermissionDenied
from instruks.domain.value_objects import PermissionAction

logger = logging.getLogger(__name__)


class CreateInstruksUseCase:
    """Start a new document series at version 1."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        sanitizer: HtmlSanitizer,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._sanitizer = sanitizer

    async def execute(self, user: CurrentUser, data: InstruksInput) -> Instruks:
        """Create version 1 of a new document."""
        has_write = await self._permission_checker.check(user, PermissionAction.WRITE)
        if not has_write:
            raise PermissionDenied("User is not allowed to create instruks")

        content = sanitize_content(self._sanitizer, data.content)
        now = datetime.now(UTC)
        instruks = Instruks(
            id=uuid4(),
            document_id=uuid4(),
            version_number=1,
            is_latest=True,
            title=data.title,
            description=data.description,
            content=content,
            category_id=data.category_id,
            created_at=now,
            updated_at=now,
            previous_version_id=None,
        )

        async with self._uow_factory() as uow:
            await ensure_category_exists(uow, data.category_id)
            await uow.instruks.create(instruks)

        logger.info(
            "Created instruks %s (document %s) by %s",
            instruks.id,
            instruks.document_id,
            user.user_id,
        )
        return instruks
