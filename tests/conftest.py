"""Pytest fixtures for Instruks tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from instruks.application.dto.current_user import CurrentUser
from instruks.application.dto.instruks_dto import InstruksInput
from instruks.domain.entities import Category, Instruks
from instruks.infrastructure.content.html_sanitizer import NH3HtmlSanitizer


# --- Fake repositories ---


class FakeInstruksRepository:
    """In-memory instruks repository. Records every write in ``writes``."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Instruks] = {}
        self.writes: list[tuple[str, UUID]] = []

    def add(self, instruks: Instruks) -> Instruks:
        """Helper to seed a row without recording a write."""
        self._by_id[instruks.id] = instruks
        return instruks

    def all(self) -> list[Instruks]:
        return list(self._by_id.values())

    async def get_by_id(self, instruks_id: UUID, for_update: bool = False) -> Instruks | None:
        return self._by_id.get(instruks_id)

    async def get_latest_by_document_id(self, document_id: UUID) -> Instruks | None:
        for i in self._by_id.values():
            if i.document_id == document_id and i.is_latest:
                return i
        return None

    async def get_successor(self, instruks_id: UUID) -> Instruks | None:
        for i in self._by_id.values():
            if i.previous_version_id == instruks_id:
                return i
        return None

    async def list_latest(self) -> list[Instruks]:
        items = [i for i in self._by_id.values() if i.is_latest]
        return sorted(items, key=lambda i: (i.title, i.id))

    async def list_latest_by_category(self, category_id: UUID) -> list[Instruks]:
        return [i for i in await self.list_latest() if i.category_id == category_id]

    async def list_versions(self, document_id: UUID) -> list[Instruks]:
        items = [i for i in self._by_id.values() if i.document_id == document_id]
        return sorted(items, key=lambda i: i.version_number)

    async def create(self, instruks: Instruks) -> Instruks:
        self._by_id[instruks.id] = instruks
        self.writes.append(("create", instruks.id))
        return instruks

    async def update(self, instruks: Instruks) -> None:
        self._by_id[instruks.id] = instruks
        self.writes.append(("update", instruks.id))

    async def delete(self, instruks_id: UUID) -> None:
        self._by_id.pop(instruks_id, None)
        self.writes.append(("delete", instruks_id))


class FakeCategoryRepository:
    """In-memory category repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Category] = {}

    def add(self, category: Category) -> Category:
        self._by_id[category.id] = category
        return category

    async def get_by_id(self, category_id: UUID) -> Category | None:
        return self._by_id.get(category_id)

    async def list(self) -> list[Category]:
        return sorted(self._by_id.values(), key=lambda c: (c.name, c.id))


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.instruks = FakeInstruksRepository()
        self.categories = FakeCategoryRepository()
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory that yields the same FakeUnitOfWork, committing like the Postgres one."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        try:
            yield uow
            await uow.commit()
        except BaseException:
            await uow.rollback()
            raise

    return _factory


def make_instruks(
    category_id: UUID,
    *,
    document_id: UUID | None = None,
    version_number: int = 1,
    is_latest: bool = True,
    previous_version_id: UUID | None = None,
    title: str = "Hand Hygiene",
    content: str = "<p>Wash hands</p>",
) -> Instruks:
    """Build an Instruks row for seeding fake repositories."""
    now = datetime.now(UTC)
    return Instruks(
        id=uuid4(),
        document_id=document_id or uuid4(),
        version_number=version_number,
        is_latest=is_latest,
        title=title,
        content=content,
        category_id=category_id,
        created_at=now,
        updated_at=now,
        previous_version_id=previous_version_id,
    )


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager over the test's FakeUnitOfWork."""
    return make_uow_factory(fake_uow)


@pytest.fixture
def category(fake_uow: FakeUnitOfWork) -> Category:
    """Category registered in the fake unit of work."""
    return fake_uow.categories.add(Category(id=uuid4(), name="Infection control"))


@pytest.fixture
def instruks_input(category: Category) -> InstruksInput:
    return InstruksInput(
        title="Hand Hygiene",
        description="Before and after patient contact",
        content="<p>Wash hands for <b>20 seconds</b></p>",
        category_id=category.id,
    )


@pytest.fixture
def doctor() -> CurrentUser:
    return CurrentUser(user_id="doctor-1", is_doctor=True)


@pytest.fixture
def nurse() -> CurrentUser:
    return CurrentUser(user_id="nurse-1", is_nurse=True)


@pytest.fixture
def sanitizer() -> NH3HtmlSanitizer:
    return NH3HtmlSanitizer()


@pytest.fixture
def mock_permission_checker():
    """AsyncMock for PermissionChecker - returns True by default."""
    from unittest.mock import AsyncMock

    mock = AsyncMock()
    mock.check.return_value = True
    return mock
