"""Instruks API resources."""

from uuid import UUID

import falcon.asgi
import pydantic

from instruks.application.dto.instruks_dto import InstruksInput
from instruks.application.use_cases.instruks.create_instruks import CreateInstruksUseCase
from instruks.application.use_cases.instruks.create_instruks_version import (
    CreateInstruksVersionUseCase,
)
from instruks.application.use_cases.instruks.delete_instruks import DeleteInstruksUseCase
from instruks.application.use_cases.instruks.export_instruks_pdf import (
    ExportInstruksPdfUseCase,
)
from instruks.application.use_cases.instruks.get_instruks import GetInstruksUseCase
from instruks.application.use_cases.instruks.list_instruks import ListInstruksUseCase
from instruks.application.use_cases.instruks.update_instruks import UpdateInstruksUseCase
from instruks.domain.exceptions import Conflict, NotFound, PermissionDenied, ValidationError
from instruks.interfaces.api.resources.serializers import (
    instruks_to_dict,
    validation_error_body,
)


async def _read_input(req: falcon.asgi.Request, resp: falcon.asgi.Response) -> InstruksInput | None:
    """Parse and validate request body; on failure fill resp with 400 and return None."""
    body = await req.get_media()
    try:
        return InstruksInput.model_validate(body)
    except pydantic.ValidationError as e:
        resp.status = falcon.HTTP_400
        resp.media = validation_error_body(e)
        return None


class InstruksCollectionResource:
    """GET/POST /v1/instruks - list latest versions and create documents."""

    def __init__(
        self,
        list_instruks: ListInstruksUseCase,
        create_instruks: CreateInstruksUseCase,
    ) -> None:
        self._list = list_instruks
        self._create = create_instruks

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List the latest version of every document."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        items = await self._list.execute()
        resp.media = {"items": [instruks_to_dict(i) for i in items]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create a new document at version 1."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        data = await _read_input(req, resp)
        if data is None:
            return

        try:
            instruks = await self._create.execute(user, data)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.location = f"/v1/instruks/{instruks.id}"
        resp.media = instruks_to_dict(instruks)
        resp.status = falcon.HTTP_201


class InstruksResource:
    """GET/PUT/DELETE /v1/instruks/{instruks_id} - one version."""

    def __init__(
        self,
        get_instruks: GetInstruksUseCase,
        update_instruks: UpdateInstruksUseCase,
        delete_instruks: DeleteInstruksUseCase,
    ) -> None:
        self._get = get_instruks
        self._update = update_instruks
        self._delete = delete_instruks

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        instruks_id: UUID,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            instruks = await self._get.execute(instruks_id)
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Instruks not found"}
            return

        resp.media = instruks_to_dict(instruks)
        resp.status = falcon.HTTP_200

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        instruks_id: UUID,
    ) -> None:
        """Edit the latest version in place."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        data = await _read_input(req, resp)
        if data is None:
            return

        try:
            updated = await self._update.execute(user, instruks_id, data)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        if not updated:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Instruks not found or not the latest version"}
            return
        resp.status = falcon.HTTP_204

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        instruks_id: UUID,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            deleted = await self._delete.execute(user, instruks_id)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return

        if not deleted:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Instruks not found"}
            return
        resp.status = falcon.HTTP_204


class InstruksVersionsResource:
    """POST /v1/instruks/{instruks_id}/versions - branch a new latest version."""

    def __init__(self, create_version: CreateInstruksVersionUseCase) -> None:
        self._create_version = create_version

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        instruks_id: UUID,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        data = await _read_input(req, resp)
        if data is None:
            return

        try:
            instruks = await self._create_version.execute(user, instruks_id, data)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Instruks not found"}
            return
        except Conflict as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
            return
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.location = f"/v1/instruks/{instruks.id}"
        resp.media = instruks_to_dict(instruks)
        resp.status = falcon.HTTP_201


class InstruksPdfResource:
    """GET /v1/instruks/{instruks_id}/pdf - download a version as PDF."""

    def __init__(self, export_pdf: ExportInstruksPdfUseCase) -> None:
        self._export_pdf = export_pdf

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        instruks_id: UUID,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            export = await self._export_pdf.execute(instruks_id)
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Instruks not found"}
            return

        resp.content_type = export.content_type
        resp.downloadable_as = export.filename
        resp.data = export.content
        resp.status = falcon.HTTP_200


class CategoryInstruksResource:
    """GET /v1/instruks/by-category/{category_id} - latest versions in a category."""

    def __init__(self, list_instruks: ListInstruksUseCase) -> None:
        self._list = list_instruks

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        category_id: UUID,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        items = await self._list.execute(category_id)
        resp.media = {"items": [instruks_to_dict(i) for i in items]}
        resp.status = falcon.HTTP_200
