# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from starlette.responses import JSONResponse

from ipamservicelayer.exceptions.catalog import BaseExceptionDetail


class ErrorBodyResponse(BaseModel):
    kind: str = "Error"
    code: int
    message: str
    details: list[BaseExceptionDetail] | None = None


class ErrorResponse(JSONResponse):
    status_code: int
    message: str

    def __init__(self, details: list[BaseExceptionDetail] | None = None):
        super().__init__(
            status_code=self.status_code,
            content=jsonable_encoder(
                ErrorBodyResponse(
                    code=self.status_code,
                    message=self.message,
                    details=details,
                )
            ),
        )


class BadRequestResponse(ErrorResponse):
    status_code = 400
    message = "Invalid request. Please check the provided data."


class NotFoundResponse(ErrorResponse):
    status_code = 404
    message = "The requested resource was not found."


class ConflictResponse(ErrorResponse):
    status_code = 409
    message = "The request conflicts with the state of the resource."


class InternalServerErrorResponse(ErrorResponse):
    status_code = 500
    message = "Unexpected internal server error. Please check the server logs for more details."
