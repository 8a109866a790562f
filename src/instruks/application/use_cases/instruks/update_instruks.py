"""Update instruks in place use case."""

import logging
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID

from instruks.application.dto.current_user import CurrentUser
from instruks.application.dto.instruks_dto import InstruksInput
from instruks.application.ports import HtmlSanitizer, PermissionChecker
from instruks.application.use_cases.instruks.category_guard import ensure_category_exists
from instruks.application.use_cases.instruks.content_guard import sanitize_content
from instruks.domain.exceptions import PermissionDenied
from instruks.domain.value_objects import PermissionAction

logger = logging.getLogger(__name__)


class UpdateInstruksUseCase:
    """Overwrite the latest version of a document without bumping its number."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        sanitizer: HtmlSanitizer,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._sanitizer = sanitizer

    async def execute(self, user: CurrentUser, instruks_id: UUID, data: InstruksInput) -> bool:
        """Update version in place. Returns False if it is missing or not the latest."""
        has_write = await self._permission_checker.check(user, PermissionAction.WRITE)
        if not has_write:
            raise PermissionDenied("User is not allowed to edit instruks")

        content = sanitize_content(self._sanitizer, data.content)

        async with self._uow_factory() as uow:
            current = await uow.instruks.get_by_id(instruks_id, for_update=True)
            if current is None or not current.is_latest:
                return False

            await ensure_category_exists(uow, data.category_id)
            await uow.instruks.update(
                replace(
                    current,
                    title=data.title,
                    description=data.description,
                    content=content,
                    category_id=data.category_id,
                    updated_at=datetime.now(UTC),
                )
            )

        logger.info("Updated instruks %s in place by %s", instruks_id, user.user_id)
        return True
