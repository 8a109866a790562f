"""Document series API resources."""

from uuid import UUID

import falcon.asgi

from instruks.application.use_cases.instruks.get_instruks import GetLatestInstruksUseCase
from instruks.application.use_cases.instruks.list_instruks import ListInstruksVersionsUseCase
from instruks.domain.exceptions import NotFound
from instruks.interfaces.api.resources.serializers import instruks_to_dict


class DocumentResource:
    """GET /v1/documents/{document_id}/latest and /versions."""

    def __init__(
        self,
        get_latest: GetLatestInstruksUseCase,
        list_versions: ListInstruksVersionsUseCase,
    ) -> None:
        self._get_latest = get_latest
        self._list_versions = list_versions

    async def on_get_latest(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: UUID,
    ) -> None:
        """Latest version of a document."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            instruks = await self._get_latest.execute(document_id)
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Document not found"}
            return

        resp.media = instruks_to_dict(instruks)
        resp.status = falcon.HTTP_200

    async def on_get_versions(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: UUID,
    ) -> None:
        """All versions of a document, oldest first."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            versions = await self._list_versions.execute(document_id)
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Document not found"}
            return

        resp.media = {"items": [instruks_to_dict(v) for v in versions]}
        resp.status = falcon.HTTP_200
