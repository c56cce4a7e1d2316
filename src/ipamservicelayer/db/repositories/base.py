#  Copyright 2026 Canonical Ltd.  This software is licensed under the
#  GNU Affero General Public License version 3 (see the file LICENSE).

from abc import ABC, abstractmethod
from itertools import islice
from typing import Any, Generic, Iterable, TypeVar
from uuid import UUID, uuid4

from sqlalchemy import (
    delete,
    func,
    insert,
    select,
    Select,
    Table,
    update,
)
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from ipamservicelayer.context import Context
from ipamservicelayer.db.filters import Clause, QuerySpec
from ipamservicelayer.exceptions.catalog import (
    AlreadyExistsException,
    BaseExceptionDetail,
    SerializationFailureException,
    StoreFailureException,
)
from ipamservicelayer.exceptions.constants import (
    UNIQUE_CONSTRAINT_VIOLATION_TYPE,
)
from ipamservicelayer.models.base import (
    IpamBaseModel,
    ListResult,
    ResourceBuilder,
)
from ipamservicelayer.utils.date import utcnow

T = TypeVar("T", bound=IpamBaseModel)

# Rows per multi-row INSERT in create_many.
INSERT_BATCH_SIZE = 1000

# SQLSTATE reported by PostgreSQL when a transaction breaks because of a
# concurrent update.
SERIALIZATION_FAILURE = "40001"


def is_serialization_failure(error: DBAPIError) -> bool:
    return getattr(error.orig, "sqlstate", None) == SERIALIZATION_FAILURE


class BaseRepository(ABC, Generic[T]):
    def __init__(self, context: Context):
        self.context = context

    @property
    def connection(self) -> AsyncConnection:
        return self.context.get_connection()

    @abstractmethod
    def get_repository_table(self) -> Table:
        pass

    @abstractmethod
    def get_model_factory(self) -> type[T]:
        pass

    def select_all_statement(self) -> Select[Any]:
        return select(self.get_repository_table())

    def _values_for_insert(self, builder: ResourceBuilder) -> dict[str, Any]:
        """The row to insert for `builder`, identity and timestamps included."""
        now = utcnow()
        return {
            "id": uuid4(),
            "created": now,
            "updated": now,
            **builder.populated_fields(),
        }

    def _raise_already_existing_exception(self):
        raise AlreadyExistsException(
            details=[
                BaseExceptionDetail(
                    type=UNIQUE_CONSTRAINT_VIOLATION_TYPE,
                    message="A resource with such identifiers already exist.",
                )
            ]
        )

    async def create(self, builder: ResourceBuilder) -> T:
        """Insert a single resource.

        The insert runs in a SAVEPOINT, so a failure leaves the enclosing
        transaction usable.
        """
        table = self.get_repository_table()
        stmt = insert(table).values(**self._values_for_insert(builder))
        stmt = stmt.returning(*table.columns)
        try:
            async with self.connection.begin_nested():
                result = await self.connection.execute(stmt)
                row = result.one()
        except IntegrityError:
            self._raise_already_existing_exception()
        except SQLAlchemyError as e:
            raise StoreFailureException.from_error(e) from e
        return self.get_model_factory()(**row._asdict())

    async def create_many(self, builders: Iterable[ResourceBuilder]) -> int:
        """Insert the resources in batches and return how many were inserted.

        Nothing is caught here: a failure is reported for the whole call and
        the enclosing transaction has to be rolled back.
        """
        table = self.get_repository_table()
        builders = iter(builders)
        count = 0
        while batch := list(islice(builders, INSERT_BATCH_SIZE)):
            try:
                await self.connection.execute(
                    insert(table),
                    [self._values_for_insert(builder) for builder in batch],
                )
            except SQLAlchemyError as e:
                raise StoreFailureException.from_error(e) from e
            count += len(batch)
        return count

    async def get_by_id(self, id: UUID) -> T | None:
        table = self.get_repository_table()
        return await self.get_one(
            query=QuerySpec(where=Clause(condition=table.c.id == id))
        )

    async def get_one(self, query: QuerySpec) -> T | None:
        stmt = query.enrich_stmt(self.select_all_statement()).limit(1)
        result = (await self._execute(stmt)).one_or_none()
        if result is None:
            return None
        return self.get_model_factory()(**result._asdict())

    async def get_many(self, query: QuerySpec) -> list[T]:
        stmt = query.enrich_stmt(self.select_all_statement())
        result = (await self._execute(stmt)).all()
        return [self.get_model_factory()(**row._asdict()) for row in result]

    async def count(self, query: QuerySpec | None = None) -> int:
        stmt = select(func.count()).select_from(self.get_repository_table())
        if query:
            stmt = query.enrich_stmt(stmt)
        return (await self._execute(stmt)).scalar_one()

    async def list(
        self, page: int, size: int, query: QuerySpec | None = None
    ) -> ListResult[T]:
        query = query or QuerySpec()
        total = await self.count(QuerySpec(where=query.where))
        stmt = (
            query.enrich_stmt(self.select_all_statement())
            .offset((page - 1) * size)
            .limit(size)
        )
        result = (await self._execute(stmt)).all()
        return ListResult[T](
            items=[self.get_model_factory()(**row._asdict()) for row in result],
            total=total,
        )

    async def update_where(
        self, query: QuerySpec, builder: ResourceBuilder
    ) -> int:
        """Update every row matching `query` in a single statement.

        Returns the number of affected rows. Since the statement is atomic,
        a condition on the current value of a column makes this a
        compare-and-set.
        """
        stmt = query.enrich_stmt(
            update(self.get_repository_table()).values(
                updated=utcnow(), **builder.populated_fields()
            )
        )
        return (await self._execute(stmt)).rowcount

    async def delete_by_id(self, id: UUID) -> T | None:
        """
        If no resource with such `id` is found, silently ignore it and return `None` in any case.
        """
        table = self.get_repository_table()
        stmt = (
            delete(table).where(table.c.id == id).returning(*table.columns)
        )
        result = (await self._execute(stmt)).one_or_none()
        if result is None:
            return None
        return self.get_model_factory()(**result._asdict())

    async def delete_many(self, query: QuerySpec) -> int:
        stmt = query.enrich_stmt(delete(self.get_repository_table()))
        return (await self._execute(stmt)).rowcount

    async def _execute(self, stmt):
        try:
            return await self.connection.execute(stmt)
        except DBAPIError as e:
            if is_serialization_failure(e):
                raise SerializationFailureException.from_error(e) from e
            raise StoreFailureException.from_error(e) from e
        except SQLAlchemyError as e:
            raise StoreFailureException.from_error(e) from e
