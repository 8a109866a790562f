"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from instruks.application.dto.current_user import CurrentUser
from instruks.application.use_cases.instruks.create_instruks import CreateInstruksUseCase
from instruks.application.use_cases.instruks.create_instruks_version import (
    CreateInstruksVersionUseCase,
)
from instruks.application.use_cases.instruks.delete_instruks import DeleteInstruksUseCase
from instruks.application.use_cases.instruks.export_instruks_pdf import (
    ExportInstruksPdfUseCase,
)
from instruks.application.use_cases.instruks.get_instruks import (
    GetInstruksUseCase,
    GetLatestInstruksUseCase,
)
from instruks.application.use_cases.instruks.list_instruks import (
    ListInstruksUseCase,
    ListInstruksVersionsUseCase,
)
from instruks.application.use_cases.instruks.update_instruks import UpdateInstruksUseCase
from instruks.infrastructure.permission.permission_checker import RolePermissionChecker
from instruks.infrastructure.rendering import ReportLabPdfRenderer
from instruks.interfaces.api.app import create_app
from instruks.interfaces.api.middleware.cors import CORSMiddleware
from instruks.interfaces.api.resources.categories import CategoriesResource
from instruks.interfaces.api.resources.documents import DocumentResource
from instruks.interfaces.api.resources.health import HealthResource
from instruks.interfaces.api.resources.instruks import (
    CategoryInstruksResource,
    InstruksCollectionResource,
    InstruksPdfResource,
    InstruksResource,
    InstruksVersionsResource,
)


class AuthBypassMiddleware:
    """Middleware that sets context.user to a fixed user for testing."""

    def __init__(self, user: CurrentUser | None) -> None:
        self._user = user

    async def process_request(self, req, resp):
        req.context.user = self._user


def build_app(uow_factory, sanitizer, user: CurrentUser | None):
    """Falcon ASGI app wired to in-memory storage and the real policy/renderer."""
    permission_checker = RolePermissionChecker()
    list_instruks = ListInstruksUseCase(unit_of_work_factory=uow_factory)
    create_instruks = CreateInstruksUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
        sanitizer=sanitizer,
    )
    update_instruks = UpdateInstruksUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
        sanitizer=sanitizer,
    )
    create_version = CreateInstruksVersionUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
        sanitizer=sanitizer,
    )
    delete_instruks = DeleteInstruksUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
    )
    export_pdf = ExportInstruksPdfUseCase(
        unit_of_work_factory=uow_factory,
        sanitizer=sanitizer,
        renderer=ReportLabPdfRenderer(),
    )
    return create_app(
        health_resource=HealthResource(),
        instruks_collection_resource=InstruksCollectionResource(list_instruks, create_instruks),
        instruks_resource=InstruksResource(
            GetInstruksUseCase(unit_of_work_factory=uow_factory),
            update_instruks,
            delete_instruks,
        ),
        instruks_versions_resource=InstruksVersionsResource(create_version),
        instruks_pdf_resource=InstruksPdfResource(export_pdf),
        category_instruks_resource=CategoryInstruksResource(list_instruks),
        document_resource=DocumentResource(
            GetLatestInstruksUseCase(unit_of_work_factory=uow_factory),
            ListInstruksVersionsUseCase(unit_of_work_factory=uow_factory),
        ),
        categories_resource=CategoriesResource(uow_factory),
        middleware=[
            CORSMiddleware(["http://localhost:5173"]),
            AuthBypassMiddleware(user),
        ],
    )


@pytest.fixture
def client(uow_factory, sanitizer, doctor) -> TestClient:
    """Client authenticated as a Doctor."""
    return TestClient(build_app(uow_factory, sanitizer, doctor))


@pytest.fixture
def nurse_client(uow_factory, sanitizer, nurse) -> TestClient:
    """Client authenticated as a Nurse."""
    return TestClient(build_app(uow_factory, sanitizer, nurse))


@pytest.fixture
def anonymous_client(uow_factory, sanitizer) -> TestClient:
    """Client without credentials."""
    return TestClient(build_app(uow_factory, sanitizer, None))
