# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from typing import Any, Awaitable, Callable

from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import structlog

from ipamapiserver.api.models.responses.errors import (
    BadRequestResponse,
    ConflictResponse,
    InternalServerErrorResponse,
    NotFoundResponse,
)
from ipamservicelayer.exceptions.catalog import (
    AlreadyExistsException,
    BaseExceptionDetail,
    ConflictException,
    NotFoundException,
    StoreFailureException,
    ValidationException,
)

logger = structlog.getLogger(__name__)


def _build_json_path(loc: list[Any]) -> str:
    elements: list[str] = []
    for elem in loc:
        if isinstance(elem, int) and elements:
            elements.append(f"{elements.pop()}[{elem}]")
        else:
            elements.append(str(elem))
    return ".".join(elements)


class ExceptionHandlers:
    @classmethod
    async def validation_exception_handler(
        cls, request: Request, exc: RequestValidationError
    ):
        """
        FastAPI raises a RequestValidationError for any validation error that
        occurs during the request processing, from JSON decoder errors to
        pydantic field validation issues. They are all bad requests.

        Each error in `exc.errors()` carries a `loc` tuple whose first item is
        the location (path, query, body, ...) and whose next items are the
        path of the wrong field.
        """
        details: list[BaseExceptionDetail] = []
        for err in exc.errors():
            d = BaseExceptionDetail(
                type=err["type"],
                message=err["msg"],
                location=str(err["loc"][0]) if err["loc"] else None,
                field=_build_json_path(list(err["loc"][1:])),
            )
            if ctx := err.get("ctx", None):
                if msg := ctx.get("reason", None):
                    d.message = msg

            details.append(d)

        return BadRequestResponse(details=details)


class ExceptionMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except AlreadyExistsException as e:
            logger.debug(e)
            return ConflictResponse(details=e.details)
        except ConflictException as e:
            logger.debug(e)
            return ConflictResponse(details=e.details)
        except ValidationException as e:
            logger.debug(e)
            return BadRequestResponse(e.details)
        except NotFoundException as e:
            logger.debug(e)
            return NotFoundResponse(e.details)
        except StoreFailureException as e:
            # The details of a store failure stay in the logs.
            logger.error(e, details=e.details)
            return InternalServerErrorResponse()
        except Exception as e:
            logger.exception(e)
            return InternalServerErrorResponse()
