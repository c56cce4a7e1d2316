# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from fastapi import APIRouter

from ipamapiserver.api.models.responses.errors import ErrorBodyResponse


class Handler:
    """The routes of one resource, registered in name order."""

    def register(self, router: APIRouter):
        for name in dir(self):
            if name.startswith("_"):
                continue

            attr = getattr(self, name)
            if config := getattr(attr, "__handler_config", None):
                router.add_api_route(endpoint=attr, **config)


def handler(**config):
    """Decorator for API handlers inside a Handler class."""

    def register_handler(func):
        config["operation_id"] = func.__name__
        if "responses" in config:
            # Request validation errors are reported as 400, not as FastAPI's
            # default 422.
            config["responses"].update({400: {"model": ErrorBodyResponse}})
        func.__handler_config = config
        return func

    return register_handler


class API:
    """API definition."""

    def __init__(self, prefix: str, handlers: list[Handler]):
        self.prefix = prefix
        self.handlers = handlers

    def register(self, router: APIRouter):
        """Register the API with the router."""
        api_router = APIRouter()
        for handler in self.handlers:
            handler.register(api_router)
        router.include_router(router=api_router, prefix=self.prefix)
