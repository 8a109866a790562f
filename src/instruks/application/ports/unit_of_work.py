"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from instruks.application.ports.repositories.category_repository import (
    CategoryRepository,
)
from instruks.application.ports.repositories.instruks_repository import (
    InstruksRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def instruks(self) -> InstruksRepository: ...

    @property
    def categories(self) -> CategoryRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
