# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


@dataclass
class ListResult(Generic[T]):
    """
    Encapsulates the result of calling a Repository method than returns a list. It includes the items and the number of items
    that matched the query.
    """

    items: Sequence[T]
    total: int


class IpamBaseModel(BaseModel):
    id: UUID

    def __eq__(self, other: Any) -> bool:
        # Pydantic is not comparing nested objects. This is the workaround to do it.
        if other.__class__ is self.__class__:
            return self.model_dump() == other.model_dump()
        return False


class IpamTimestampedBaseModel(IpamBaseModel):
    created: datetime
    updated: datetime


class Unset:
    """Sentinel object"""

    def __eq__(self, other):
        return other.__class__ is self.__class__

    def __repr__(self):
        return "Unset"


UNSET = Unset()


class ResourceBuilder(BaseModel):
    """
    The base class for all the builders.

    Fields default to the sentinel UNSET, so that a builder only carries the
    values that have to be written.
    """

    # Needed to have the sentinel object Unset as a field type.
    model_config = ConfigDict(arbitrary_types_allowed=True)

    def __eq__(self, other):
        # Pydantic is not comparing nested objects. This is the workaround to do it.
        if other.__class__ is self.__class__:
            return self.model_dump() == other.model_dump()
        return False

    def populated_fields(self) -> dict[str, Any]:
        """Returns the name, value of all the fields that aren't UNSET."""
        return {
            k: v
            for k, v in self.model_dump().items()
            if not isinstance(v, Unset)
        }
