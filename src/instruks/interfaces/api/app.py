"""Falcon ASGI application."""

import logging

import falcon.asgi
import psycopg
from falcon.asgi import App

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

logger = logging.getLogger(__name__)


async def handle_integrity_error(req, resp, ex, params) -> None:
    """Unique/foreign key violations mean a concurrent writer won; report 409."""
    logger.warning("Integrity error on %s %s: %s", req.method, req.path, ex)
    resp.status = falcon.HTTP_409
    resp.media = {"error": "Conflicting change, reload and try again"}


async def handle_unexpected_error(req, resp, ex, params) -> None:
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    *,
    health_resource: HealthResource,
    instruks_collection_resource: InstruksCollectionResource,
    instruks_resource: InstruksResource,
    instruks_versions_resource: InstruksVersionsResource,
    instruks_pdf_resource: InstruksPdfResource,
    category_instruks_resource: CategoryInstruksResource,
    document_resource: DocumentResource,
    categories_resource: CategoriesResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(psycopg.IntegrityError, handle_integrity_error)

    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/instruks", instruks_collection_resource)
    app.add_route("/v1/instruks/{instruks_id:uuid}", instruks_resource)
    app.add_route("/v1/instruks/{instruks_id:uuid}/versions", instruks_versions_resource)
    app.add_route("/v1/instruks/{instruks_id:uuid}/pdf", instruks_pdf_resource)
    app.add_route("/v1/instruks/by-category/{category_id:uuid}", category_instruks_resource)
    app.add_route("/v1/documents/{document_id:uuid}/latest", document_resource, suffix="latest")
    app.add_route(
        "/v1/documents/{document_id:uuid}/versions", document_resource, suffix="versions"
    )
    app.add_route("/v1/categories", categories_resource)
    return app
