"""Unit tests for the instruks versioning use cases."""

from uuid import uuid4

import pytest

from instruks.application.dto.instruks_dto import InstruksInput
from instruks.application.use_cases.instruks.create_instruks import CreateInstruksUseCase
from instruks.application.use_cases.instruks.create_instruks_version import (
    CreateInstruksVersionUseCase,
)
from instruks.application.use_cases.instruks.delete_instruks import DeleteInstruksUseCase
from instruks.application.use_cases.instruks.get_instruks import (
    GetInstruksUseCase,
    GetLatestInstruksUseCase,
)
from instruks.application.use_cases.instruks.list_instruks import (
    ListInstruksUseCase,
    ListInstruksVersionsUseCase,
)
from instruks.application.use_cases.instruks.update_instruks import UpdateInstruksUseCase
from instruks.domain.entities import Category
from instruks.domain.exceptions import Conflict, NotFound, PermissionDenied, ValidationError
from instruks.domain.value_objects import PermissionAction

from tests.conftest import FakeUnitOfWork, make_instruks


@pytest.fixture
def create_uc(uow_factory, mock_permission_checker, sanitizer) -> CreateInstruksUseCase:
    return CreateInstruksUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=mock_permission_checker,
        sanitizer=sanitizer,
    )


@pytest.fixture
def update_uc(uow_factory, mock_permission_checker, sanitizer) -> UpdateInstruksUseCase:
    return UpdateInstruksUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=mock_permission_checker,
        sanitizer=sanitizer,
    )


@pytest.fixture
def version_uc(uow_factory, mock_permission_checker, sanitizer) -> CreateInstruksVersionUseCase:
    return CreateInstruksVersionUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=mock_permission_checker,
        sanitizer=sanitizer,
    )


@pytest.fixture
def delete_uc(uow_factory, mock_permission_checker) -> DeleteInstruksUseCase:
    return DeleteInstruksUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=mock_permission_checker,
    )


def _input(category: Category, title: str, content: str = "<p>Body</p>") -> InstruksInput:
    return InstruksInput(title=title, content=content, category_id=category.id)


# --- CreateInstruksUseCase ---


@pytest.mark.asyncio
async def test_create_starts_series_at_version_one(
    create_uc, doctor, instruks_input, fake_uow: FakeUnitOfWork
) -> None:
    """New series: version 1, latest, no predecessor, timestamps equal."""
    instruks = await create_uc.execute(doctor, instruks_input)

    assert instruks.version_number == 1
    assert instruks.is_latest is True
    assert instruks.previous_version_id is None
    assert instruks.document_id != instruks.id
    assert instruks.created_at == instruks.updated_at
    assert instruks.title == "Hand Hygiene"
    assert instruks.description == "Before and after patient contact"
    assert await fake_uow.instruks.get_by_id(instruks.id) == instruks
    assert fake_uow.commits == 1


@pytest.mark.asyncio
async def test_create_sanitizes_content(create_uc, doctor, category) -> None:
    """Script tags are stripped before the row is stored."""
    data = _input(category, "Safe", "<p>ok</p><script>alert(1)</script>")

    instruks = await create_uc.execute(doctor, data)

    assert "script" not in instruks.content
    assert "<p>ok</p>" in instruks.content


@pytest.mark.asyncio
async def test_create_each_series_gets_own_document_id(create_uc, doctor, instruks_input) -> None:
    first = await create_uc.execute(doctor, instruks_input)
    second = await create_uc.execute(doctor, instruks_input)

    assert first.document_id != second.document_id
    assert first.version_number == second.version_number == 1


@pytest.mark.asyncio
async def test_create_permission_denied_writes_nothing(
    create_uc, nurse, instruks_input, mock_permission_checker, fake_uow
) -> None:
    mock_permission_checker.check.return_value = False

    with pytest.raises(PermissionDenied):
        await create_uc.execute(nurse, instruks_input)

    mock_permission_checker.check.assert_awaited_once_with(nurse, PermissionAction.WRITE)
    assert fake_uow.instruks.writes == []


@pytest.mark.asyncio
async def test_create_unknown_category_raises_validation_error(
    create_uc, doctor, fake_uow
) -> None:
    data = InstruksInput(title="Orphan", content="<p>x</p>", category_id=uuid4())

    with pytest.raises(ValidationError, match="does not exist"):
        await create_uc.execute(doctor, data)

    assert fake_uow.instruks.writes == []
    assert fake_uow.rollbacks == 1


@pytest.mark.asyncio
async def test_create_rejects_content_that_sanitizes_to_nothing(
    create_uc, doctor, category, fake_uow
) -> None:
    with pytest.raises(ValidationError, match="Content is empty"):
        await create_uc.execute(doctor, _input(category, "Scripted", "<script>x()</script>"))

    assert fake_uow.instruks.writes == []


# --- UpdateInstruksUseCase ---


@pytest.mark.asyncio
async def test_update_latest_in_place(update_uc, doctor, category, fake_uow) -> None:
    """Update keeps id, document and version number; stamps updated_at."""
    current = fake_uow.instruks.add(make_instruks(category.id))

    updated = await update_uc.execute(
        doctor, current.id, _input(category, "Hand Hygiene (rev)", "<p>New</p>")
    )

    assert updated is True
    stored = await fake_uow.instruks.get_by_id(current.id)
    assert stored.title == "Hand Hygiene (rev)"
    assert stored.content == "<p>New</p>"
    assert stored.version_number == current.version_number
    assert stored.document_id == current.document_id
    assert stored.created_at == current.created_at
    assert stored.updated_at >= current.updated_at
    assert stored.is_latest is True


@pytest.mark.asyncio
async def test_update_missing_returns_false(update_uc, doctor, category, fake_uow) -> None:
    assert await update_uc.execute(doctor, uuid4(), _input(category, "X")) is False
    assert fake_uow.instruks.writes == []


@pytest.mark.asyncio
async def test_update_non_latest_returns_false_and_mutates_nothing(
    update_uc, doctor, category, fake_uow
) -> None:
    old = fake_uow.instruks.add(make_instruks(category.id, is_latest=False))

    result = await update_uc.execute(doctor, old.id, _input(category, "Changed"))

    assert result is False
    assert await fake_uow.instruks.get_by_id(old.id) == old
    assert fake_uow.instruks.writes == []


@pytest.mark.asyncio
async def test_update_permission_denied(
    update_uc, nurse, category, mock_permission_checker, fake_uow
) -> None:
    current = fake_uow.instruks.add(make_instruks(category.id))
    mock_permission_checker.check.return_value = False

    with pytest.raises(PermissionDenied):
        await update_uc.execute(nurse, current.id, _input(category, "Changed"))

    assert fake_uow.instruks.writes == []


@pytest.mark.asyncio
async def test_update_rejects_content_that_sanitizes_to_nothing(
    update_uc, doctor, category, fake_uow
) -> None:
    current = fake_uow.instruks.add(make_instruks(category.id))

    with pytest.raises(ValidationError, match="Content is empty"):
        await update_uc.execute(doctor, current.id, _input(category, "Changed", "<style>p {}</style>"))

    assert await fake_uow.instruks.get_by_id(current.id) == current
    assert fake_uow.instruks.writes == []


@pytest.mark.asyncio
async def test_new_version_rejects_content_that_sanitizes_to_nothing(
    version_uc, doctor, category, fake_uow
) -> None:
    source = fake_uow.instruks.add(make_instruks(category.id))

    with pytest.raises(ValidationError, match="Content is empty"):
        await version_uc.execute(doctor, source.id, _input(category, "v2", "<script>x()</script>"))

    assert (await fake_uow.instruks.get_by_id(source.id)).is_latest is True
    assert fake_uow.instruks.writes == []


# --- CreateInstruksVersionUseCase ---


@pytest.mark.asyncio
async def test_new_version_missing_source_raises_not_found_and_writes_nothing(
    version_uc, doctor, category, fake_uow
) -> None:
    with pytest.raises(NotFound):
        await version_uc.execute(doctor, uuid4(), _input(category, "v2"))

    assert fake_uow.instruks.writes == []


@pytest.mark.asyncio
async def test_new_version_demotes_source_and_links_back(
    version_uc, doctor, category, fake_uow
) -> None:
    source = fake_uow.instruks.add(make_instruks(category.id))

    new = await version_uc.execute(doctor, source.id, _input(category, "Hand Hygiene v2"))

    demoted = await fake_uow.instruks.get_by_id(source.id)
    assert demoted.is_latest is False
    assert new.is_latest is True
    assert new.version_number == 2
    assert new.document_id == source.document_id
    assert new.previous_version_id == source.id
    assert new.id != source.id
    assert fake_uow.instruks.writes == [("update", source.id), ("create", new.id)]


@pytest.mark.asyncio
async def test_new_version_from_non_latest_raises_conflict(
    version_uc, doctor, category, fake_uow
) -> None:
    source = fake_uow.instruks.add(make_instruks(category.id))
    await version_uc.execute(doctor, source.id, _input(category, "v2"))
    writes_before = list(fake_uow.instruks.writes)

    with pytest.raises(Conflict):
        await version_uc.execute(doctor, source.id, _input(category, "v2 again"))

    assert fake_uow.instruks.writes == writes_before


@pytest.mark.asyncio
async def test_version_chain_is_contiguous(create_uc, version_uc, doctor, category, fake_uow) -> None:
    """After N branches: numbers 1..N+1, only the last is latest, each links to its predecessor."""
    current = await create_uc.execute(doctor, _input(category, "v1"))
    for n in range(2, 6):
        current = await version_uc.execute(doctor, current.id, _input(category, f"v{n}"))

    versions = await fake_uow.instruks.list_versions(current.document_id)
    assert [v.version_number for v in versions] == [1, 2, 3, 4, 5]
    assert [v.is_latest for v in versions] == [False, False, False, False, True]
    assert versions[-1].id == current.id
    assert versions[0].previous_version_id is None
    for prev, nxt in zip(versions, versions[1:]):
        assert nxt.previous_version_id == prev.id


@pytest.mark.asyncio
async def test_new_version_permission_denied(
    version_uc, nurse, category, mock_permission_checker, fake_uow
) -> None:
    source = fake_uow.instruks.add(make_instruks(category.id))
    mock_permission_checker.check.return_value = False

    with pytest.raises(PermissionDenied):
        await version_uc.execute(nurse, source.id, _input(category, "v2"))

    assert (await fake_uow.instruks.get_by_id(source.id)).is_latest is True


# --- DeleteInstruksUseCase ---


@pytest.mark.asyncio
async def test_delete_missing_returns_false(delete_uc, doctor, fake_uow) -> None:
    assert await delete_uc.execute(doctor, uuid4()) is False
    assert fake_uow.instruks.writes == []


@pytest.mark.asyncio
async def test_delete_latest_promotes_predecessor(
    create_uc, version_uc, delete_uc, doctor, category, fake_uow
) -> None:
    v1 = await create_uc.execute(doctor, _input(category, "v1"))
    v2 = await version_uc.execute(doctor, v1.id, _input(category, "v2"))

    assert await delete_uc.execute(doctor, v2.id) is True

    assert await fake_uow.instruks.get_by_id(v2.id) is None
    latest = await fake_uow.instruks.get_latest_by_document_id(v1.document_id)
    assert latest.id == v1.id
    assert latest.is_latest is True


@pytest.mark.asyncio
async def test_delete_middle_version_relinks_successor(
    create_uc, version_uc, delete_uc, doctor, category, fake_uow
) -> None:
    v1 = await create_uc.execute(doctor, _input(category, "v1"))
    v2 = await version_uc.execute(doctor, v1.id, _input(category, "v2"))
    v3 = await version_uc.execute(doctor, v2.id, _input(category, "v3"))

    assert await delete_uc.execute(doctor, v2.id) is True

    remaining = await fake_uow.instruks.list_versions(v1.document_id)
    assert [v.version_number for v in remaining] == [1, 3]
    assert remaining[1].id == v3.id
    assert remaining[1].previous_version_id == v1.id
    assert remaining[1].is_latest is True
    assert remaining[0].is_latest is False


@pytest.mark.asyncio
async def test_delete_only_version_removes_series(
    create_uc, delete_uc, doctor, category, fake_uow
) -> None:
    v1 = await create_uc.execute(doctor, _input(category, "v1"))

    assert await delete_uc.execute(doctor, v1.id) is True

    assert await fake_uow.instruks.list_versions(v1.document_id) == []


@pytest.mark.asyncio
async def test_delete_permission_denied(
    delete_uc, nurse, category, mock_permission_checker, fake_uow
) -> None:
    target = fake_uow.instruks.add(make_instruks(category.id))
    mock_permission_checker.check.return_value = False

    with pytest.raises(PermissionDenied):
        await delete_uc.execute(nurse, target.id)

    mock_permission_checker.check.assert_awaited_once_with(nurse, PermissionAction.DELETE)
    assert await fake_uow.instruks.get_by_id(target.id) == target


# --- Reads ---


@pytest.mark.asyncio
async def test_get_missing_raises_not_found(uow_factory) -> None:
    with pytest.raises(NotFound):
        await GetInstruksUseCase(unit_of_work_factory=uow_factory).execute(uuid4())


@pytest.mark.asyncio
async def test_get_latest_for_unknown_document_raises_not_found(uow_factory) -> None:
    with pytest.raises(NotFound):
        await GetLatestInstruksUseCase(unit_of_work_factory=uow_factory).execute(uuid4())


@pytest.mark.asyncio
async def test_list_returns_only_latest_versions(uow_factory, category, fake_uow) -> None:
    other = fake_uow.categories.add(Category(id=uuid4(), name="Medication"))
    old = make_instruks(category.id, is_latest=False, title="A")
    fake_uow.instruks.add(old)
    newer = fake_uow.instruks.add(
        make_instruks(
            category.id,
            document_id=old.document_id,
            version_number=2,
            previous_version_id=old.id,
            title="A",
        )
    )
    elsewhere = fake_uow.instruks.add(make_instruks(other.id, title="B"))
    use_case = ListInstruksUseCase(unit_of_work_factory=uow_factory)

    assert [i.id for i in await use_case.execute()] == [newer.id, elsewhere.id]
    assert [i.id for i in await use_case.execute(category.id)] == [newer.id]
    assert await use_case.execute(uuid4()) == []


@pytest.mark.asyncio
async def test_list_versions_ordered_and_not_found(uow_factory, category, fake_uow) -> None:
    v1 = fake_uow.instruks.add(make_instruks(category.id, is_latest=False))
    v2 = fake_uow.instruks.add(
        make_instruks(
            category.id, document_id=v1.document_id, version_number=2, previous_version_id=v1.id
        )
    )
    use_case = ListInstruksVersionsUseCase(unit_of_work_factory=uow_factory)

    assert [v.id for v in await use_case.execute(v1.document_id)] == [v1.id, v2.id]
    with pytest.raises(NotFound):
        await use_case.execute(uuid4())


# --- Scenario ---


@pytest.mark.asyncio
async def test_hand_hygiene_lifecycle(
    create_uc, version_uc, delete_uc, uow_factory, doctor, category
) -> None:
    """Create, branch, delete the first version; the second remains latest."""
    get_uc = GetInstruksUseCase(unit_of_work_factory=uow_factory)
    latest_uc = GetLatestInstruksUseCase(unit_of_work_factory=uow_factory)

    v1 = await create_uc.execute(doctor, _input(category, "Hand Hygiene"))
    assert v1.version_number == 1 and v1.is_latest

    v2 = await version_uc.execute(doctor, v1.id, _input(category, "Hand Hygiene v2"))
    assert (await get_uc.execute(v1.id)).is_latest is False
    assert v2.version_number == 2
    assert v2.is_latest is True
    assert v2.previous_version_id == v1.id

    assert await delete_uc.execute(doctor, v1.id) is True
    with pytest.raises(NotFound):
        await get_uc.execute(v1.id)
    latest = await latest_uc.execute(v1.document_id)
    assert latest.id == v2.id
    assert latest.previous_version_id is None
