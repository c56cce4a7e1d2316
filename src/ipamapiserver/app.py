# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from dataclasses import dataclass
from typing import Callable, Type

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.utils import get_openapi
import uvicorn

from ipamapiserver.api.base import API
from ipamapiserver.api.handlers import APIv1
from ipamapiserver.constants import API_PREFIX
from ipamapiserver.middlewares.context import ContextMiddleware
from ipamapiserver.middlewares.db import TransactionMiddleware
from ipamapiserver.middlewares.exceptions import (
    ExceptionHandlers,
    ExceptionMiddleware,
)
from ipamapiserver.middlewares.services import ServicesMiddleware
from ipamapiserver.settings import Config
from ipamservicelayer.db import Database


class MiddlewareHandler:
    def __init__(self, middleware_class, **kwargs):
        self.middleware_class = middleware_class
        self.kwargs = kwargs

    def get_middleware(self):
        return self.middleware_class

    def get_kwargs(self):
        return self.kwargs


@dataclass
class ExceptionHandler:
    exception_type: Type[Exception]
    handler: Callable


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 8080


def custom_openapi(app: FastAPI):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="IPAM API v1",
        version="0.1.0",
        openapi_version="3.0.3",
        summary="Subnets and IPv4 address allocations",
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema


class App:
    def __init__(
        self,
        app_title: str,
        app_name: str,
        api: list[API],
        # Order is important: the last in the list is the first processing the request.
        middlewares: list[MiddlewareHandler],
        exception_handlers: list[ExceptionHandler],
        server_config: ServerConfig,
    ):
        self._app_title = app_title
        self._name = app_name
        self._api = api
        self._middlewares = middlewares
        self._exception_handlers = exception_handlers
        self._server_config = server_config
        self._app = self._prepare_app()
        self._server = self._prepare_server()

    def _prepare_app(self):
        app = FastAPI(
            title=self._app_title,
            name=self._name,
            docs_url=f"{API_PREFIX}/docs",
            openapi_url=f"{API_PREFIX}/openapi.json",
        )
        app.openapi = lambda: custom_openapi(app)

        for api in self._api:
            api.register(app.router)

        for middleware in self._middlewares:
            app.add_middleware(
                middleware.get_middleware(), **middleware.get_kwargs()
            )

        for exception_handler in self._exception_handlers:
            app.add_exception_handler(
                exception_handler.exception_type, exception_handler.handler
            )

        return app

    def _prepare_server(self) -> uvicorn.Server:
        server_config = uvicorn.Config(
            self._app,
            loop="asyncio",
            proxy_headers=True,
            host=self._server_config.host,
            port=self._server_config.port,
            # We configure the logging OUTSIDE the library in order to use our custom json formatter.
            log_config=None,
        )
        return uvicorn.Server(server_config)

    @property
    def fastapi_app(self) -> FastAPI:
        return self._app

    @property
    def server(self) -> uvicorn.Server:
        return self._server


def create_app(config: Config, db: Database) -> App:
    """Assemble the API server.

    The database is injected so that the tests can provide their own.
    """
    return App(
        app_title="IPAMAPIServer",
        app_name="ipamapiserver",
        api=[APIv1],
        # The exception middleware must see every exception raised after the
        # transaction has been rolled back, so it wraps the transaction one.
        middlewares=[
            MiddlewareHandler(ServicesMiddleware, settings=config.services),
            MiddlewareHandler(TransactionMiddleware, db=db),
            MiddlewareHandler(ExceptionMiddleware),
            MiddlewareHandler(ContextMiddleware),
        ],
        exception_handlers=[
            ExceptionHandler(
                RequestValidationError,
                ExceptionHandlers.validation_exception_handler,
            )
        ],
        server_config=ServerConfig(host=config.host, port=config.port),
    )
