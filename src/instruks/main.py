"""Application entry point and composition root."""

import logging

from instruks import __version__
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
from instruks.config import get_settings
from instruks.infrastructure.auth.keycloak_provider import KeycloakProvider
from instruks.infrastructure.content.html_sanitizer import NH3HtmlSanitizer
from instruks.infrastructure.permission.permission_checker import RolePermissionChecker
from instruks.infrastructure.persistence.postgres.connection import create_pool
from instruks.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from instruks.infrastructure.rendering import ReportLabPdfRenderer
from instruks.interfaces.api.app import create_app
from instruks.interfaces.api.middleware.auth import AuthMiddleware
from instruks.interfaces.api.middleware.cors import CORSMiddleware
from instruks.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
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
from instruks.log_config import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """CLI entry point."""
    print(f"Instruks v{__version__}")


def create_instruks_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings.log_level)
    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("Keycloak client secret not set; all requests are unauthenticated")

    permission_checker = RolePermissionChecker()
    sanitizer = NH3HtmlSanitizer()
    renderer = ReportLabPdfRenderer(logo_path=settings.pdf_logo_path)

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
    get_instruks = GetInstruksUseCase(unit_of_work_factory=uow_factory)
    get_latest = GetLatestInstruksUseCase(unit_of_work_factory=uow_factory)
    list_versions = ListInstruksVersionsUseCase(unit_of_work_factory=uow_factory)
    export_pdf = ExportInstruksPdfUseCase(
        unit_of_work_factory=uow_factory,
        sanitizer=sanitizer,
        renderer=renderer,
    )

    cors_origins = [
        o.strip() for o in settings.cors_origins.split(",") if o.strip()
    ]
    return create_app(
        health_resource=HealthResource(pool),
        instruks_collection_resource=InstruksCollectionResource(list_instruks, create_instruks),
        instruks_resource=InstruksResource(get_instruks, update_instruks, delete_instruks),
        instruks_versions_resource=InstruksVersionsResource(create_version),
        instruks_pdf_resource=InstruksPdfResource(export_pdf),
        category_instruks_resource=CategoryInstruksResource(list_instruks),
        document_resource=DocumentResource(get_latest, list_versions),
        categories_resource=CategoriesResource(uow_factory),
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak),
        ],
    )


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_instruks_app(), host="0.0.0.0", port=8000, log_level=settings.log_level.lower())
