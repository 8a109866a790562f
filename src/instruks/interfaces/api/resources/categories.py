"""Category API resources."""

import falcon.asgi

from instruks.interfaces.api.resources.serializers import category_to_dict


class CategoriesResource:
    """GET /v1/categories - list categories."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        async with self._uow_factory() as uow:
            categories = await uow.categories.list()

        resp.media = {"items": [category_to_dict(c) for c in categories]}
        resp.status = falcon.HTTP_200
