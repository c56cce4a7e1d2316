# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from typing import Self

from pydantic import BaseModel

from ipamservicelayer.exceptions.constants import (
    INVALID_ARGUMENT_VIOLATION_TYPE,
    STORE_FAILURE_VIOLATION_TYPE,
)


class BaseExceptionDetail(BaseModel):
    type: str
    message: str
    field: str | None = None
    location: str | None = None


class BaseException(Exception):
    def __init__(
        self, message: str, details: list[BaseExceptionDetail] | None = None
    ):
        super().__init__(message)
        self.details = details


class AlreadyExistsException(BaseException):
    def __init__(self, details: list[BaseExceptionDetail] | None = None):
        super().__init__(
            "An instance with the same unique attributes already exists.",
            details,
        )


class ConflictException(BaseException):
    def __init__(self, details: list[BaseExceptionDetail] | None = None):
        super().__init__(
            "There is a conflict with an existing resource.",
            details,
        )

    @classmethod
    def build(cls, type: str, message: str) -> Self:
        return cls(details=[BaseExceptionDetail(type=type, message=message)])


class NotFoundException(BaseException):
    def __init__(self, details: list[BaseExceptionDetail] | None = None):
        super().__init__("The requested resource was not found.", details)


class ValidationException(BaseException):
    def __init__(self, details: list[BaseExceptionDetail] | None = None):
        super().__init__("Invalid value.", details)

    @classmethod
    def build_for_field(
        cls,
        field: str,
        message: str,
        type: str = INVALID_ARGUMENT_VIOLATION_TYPE,
    ) -> Self:
        return cls(
            details=[
                BaseExceptionDetail(
                    type=type,
                    field=field,
                    message=message,
                )
            ]
        )


class StoreFailureException(BaseException):
    """The storage backend failed to execute a statement."""

    def __init__(self, details: list[BaseExceptionDetail] | None = None):
        super().__init__("The storage backend failed.", details)

    @classmethod
    def from_error(cls, error: Exception) -> Self:
        return cls(
            details=[
                BaseExceptionDetail(
                    type=STORE_FAILURE_VIOLATION_TYPE,
                    message=str(error).splitlines()[0] if str(error) else "",
                )
            ]
        )


class SerializationFailureException(StoreFailureException):
    """A concurrent transaction changed the rows a statement depended on."""
