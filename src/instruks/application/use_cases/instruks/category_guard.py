"""Category existence check shared by the mutating use cases."""

from uuid import UUID

from instruks.application.ports import UnitOfWork
from instruks.domain.exceptions import ValidationError


async def ensure_category_exists(uow: UnitOfWork, category_id: UUID) -> None:
    """Raise ValidationError when category_id does not reference a category."""
    if await uow.categories.get_by_id(category_id) is None:
        raise ValidationError(f"Category {category_id} does not exist")
