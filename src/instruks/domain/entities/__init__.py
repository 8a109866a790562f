"""Domain entities."""

from instruks.domain.entities.category import Category
from instruks.domain.entities.instruks import Instruks

__all__ = [
    "Category",
    "Instruks",
]
