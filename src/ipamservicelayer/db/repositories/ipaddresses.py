#  Copyright 2026 Canonical Ltd.  This software is licensed under the
#  GNU Affero General Public License version 3 (see the file LICENSE).

from typing import Any
from uuid import UUID

from sqlalchemy import Table

from ipamservicelayer.builders.ipaddresses import IPAddressBuilder
from ipamservicelayer.db.filters import (
    Clause,
    ClauseFactory,
    OrderByClause,
    OrderByClauseFactory,
)
from ipamservicelayer.db.repositories.base import BaseRepository
from ipamservicelayer.db.tables import IPAddressTable
from ipamservicelayer.models.ipaddresses import IPAddress
from ipamservicelayer.utils.network import address_value


class IPAddressClauseFactory(ClauseFactory):
    @classmethod
    def with_subnet_id(cls, subnet_id: UUID) -> Clause:
        return Clause(condition=IPAddressTable.c.subnet_id == subnet_id)

    @classmethod
    def with_address(cls, address: str) -> Clause:
        return Clause(condition=IPAddressTable.c.address == address)

    @classmethod
    def with_status(cls, status: str) -> Clause:
        return Clause(condition=IPAddressTable.c.status == status)


class IPAddressOrderByClauses(OrderByClauseFactory):
    @staticmethod
    def by_address() -> OrderByClause:
        # Numeric order: 10.0.0.2 comes before 10.0.0.10.
        return OrderByClause(column=IPAddressTable.c.address_value)


class IPAddressesRepository(BaseRepository[IPAddress]):
    def get_repository_table(self) -> Table:
        return IPAddressTable

    def get_model_factory(self) -> type[IPAddress]:
        return IPAddress

    def _values_for_insert(self, builder: IPAddressBuilder) -> dict[str, Any]:
        values = super()._values_for_insert(builder)
        values["address_value"] = address_value(values["address"])
        return values
