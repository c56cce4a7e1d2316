#  Copyright 2026 Canonical Ltd.  This software is licensed under the
#  GNU Affero General Public License version 3 (see the file LICENSE).

from sqlalchemy import desc, Table

from ipamservicelayer.db.filters import (
    OrderByClause,
    OrderByClauseFactory,
    QuerySpec,
)
from ipamservicelayer.db.repositories.base import BaseRepository
from ipamservicelayer.db.tables import SubnetTable
from ipamservicelayer.models.subnets import Subnet


class SubnetsOrderByClauses(OrderByClauseFactory):
    @staticmethod
    def by_created() -> OrderByClause:
        return OrderByClause(column=SubnetTable.c.created)


class SubnetsRepository(BaseRepository[Subnet]):
    def get_repository_table(self) -> Table:
        return SubnetTable

    def get_model_factory(self) -> type[Subnet]:
        return Subnet

    async def get_all_newest_first(self) -> list[Subnet]:
        return await self.get_many(
            query=QuerySpec(
                order_by=[
                    SubnetsOrderByClauses.desc_clause(
                        SubnetsOrderByClauses.by_created()
                    ),
                    # Ties on the creation time keep a stable order.
                    OrderByClause(column=desc(SubnetTable.c.id)),
                ]
            )
        )
