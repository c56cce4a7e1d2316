#  Copyright 2026 Canonical Ltd.  This software is licensed under the
#  GNU Affero General Public License version 3 (see the file LICENSE).

from abc import ABC
from typing import Generic, Iterable, TypeVar
from uuid import UUID

from ipamservicelayer.context import Context
from ipamservicelayer.db.filters import QuerySpec
from ipamservicelayer.db.repositories.base import BaseRepository
from ipamservicelayer.models.base import (
    IpamBaseModel,
    ListResult,
    ResourceBuilder,
)


class Service(ABC):  # noqa: B024
    """Base class for services."""

    def __init__(self, context: Context):
        self.context = context


# M Model
M = TypeVar("M", bound=IpamBaseModel)

# R Repository
R = TypeVar("R", bound=BaseRepository)

# B Builder
B = TypeVar("B", bound=ResourceBuilder)


class BaseService(Service, ABC, Generic[M, R, B]):
    """
    The base class for all the services that have a BaseRepository.
    The `get_many`, `get_by_id` and all the other methods of the BaseRepository are just pass-through methods in the Service
    most of the time. In case the service needs to put additional business logic in these methods, it needs to override them.
    """

    def __init__(self, context: Context, repository: R):
        super().__init__(context)
        self.repository = repository

    async def get_many(self, query: QuerySpec) -> list[M]:
        return await self.repository.get_many(query=query)

    async def get_by_id(self, id: UUID) -> M | None:
        return await self.repository.get_by_id(id=id)

    async def list(
        self, page: int, size: int, query: QuerySpec | None = None
    ) -> ListResult[M]:
        return await self.repository.list(page=page, size=size, query=query)

    async def pre_create_hook(self, builder: B) -> None:
        """
        Override this function in your Service to validate the builder. It runs before anything is written.
        """
        return None

    async def post_create_hook(self, resource: M) -> None:
        return None

    async def create(self, builder: B) -> M:
        await self.pre_create_hook(builder)
        created_resource = await self.repository.create(builder=builder)
        await self.post_create_hook(created_resource)
        return created_resource

    async def create_many(self, builders: Iterable[B]) -> int:
        return await self.repository.create_many(builders)

    async def update_where(self, query: QuerySpec, builder: B) -> int:
        return await self.repository.update_where(query=query, builder=builder)

    async def post_delete_hook(self, resource: M) -> None:
        """
        Override this function in your Service to perform post-hooks with the deleted object.
        This is called only if the delete query matched a target, so you are sure the `resource` is not None.
        """
        return None

    async def delete_by_id(self, id: UUID) -> M | None:
        resource = await self.repository.delete_by_id(id=id)
        if resource is not None:
            await self.post_delete_hook(resource)
        return resource

    async def delete_many(self, query: QuerySpec) -> int:
        return await self.repository.delete_many(query=query)
