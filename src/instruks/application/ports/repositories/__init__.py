"""Repository ports."""

from instruks.application.ports.repositories.category_repository import (
    CategoryRepository,
)
from instruks.application.ports.repositories.instruks_repository import (
    InstruksRepository,
)

__all__ = [
    "CategoryRepository",
    "InstruksRepository",
]
