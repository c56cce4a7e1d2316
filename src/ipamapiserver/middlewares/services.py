# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from ipamservicelayer.services import ServiceCollection, ServicesSettings


async def services(
    request: Request,
) -> ServiceCollection:
    """Dependency to return the services collection."""
    return request.state.services


class ServicesMiddleware(BaseHTTPMiddleware):
    """Injects the services in the request state."""

    def __init__(
        self, app: ASGIApp, settings: ServicesSettings | None = None
    ):
        super().__init__(app)
        self.settings = settings or ServicesSettings()

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request.state.services = await ServiceCollection.produce(
            request.state.context, self.settings
        )
        return await call_next(request)
