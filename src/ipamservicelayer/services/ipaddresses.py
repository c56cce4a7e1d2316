#  Copyright 2026 Canonical Ltd.  This software is licensed under the
#  GNU Affero General Public License version 3 (see the file LICENSE).

from uuid import UUID

import structlog

from ipamservicelayer.builders.ipaddresses import IPAddressBuilder
from ipamservicelayer.context import Context
from ipamservicelayer.db.filters import QuerySpec
from ipamservicelayer.db.repositories.ipaddresses import (
    IPAddressClauseFactory,
    IPAddressesRepository,
    IPAddressOrderByClauses,
)
from ipamservicelayer.enums.ipaddress import IpAddressStatus
from ipamservicelayer.exceptions.catalog import (
    ConflictException,
    SerializationFailureException,
    ValidationException,
)
from ipamservicelayer.exceptions.constants import (
    ADDRESS_NOT_ALLOCATED_VIOLATION_TYPE,
    ADDRESS_NOT_AVAILABLE_VIOLATION_TYPE,
    INVALID_HOSTNAME_VIOLATION_TYPE,
    MISSING_FIELD_VIOLATION_TYPE,
)
from ipamservicelayer.models.ipaddresses import IPAddress
from ipamservicelayer.services.base import BaseService
from ipamservicelayer.utils.dns import validate_hostname

logger = structlog.getLogger()


class IPAddressesService(
    BaseService[IPAddress, IPAddressesRepository, IPAddressBuilder]
):
    def __init__(
        self,
        context: Context,
        ipaddresses_repository: IPAddressesRepository,
    ):
        super().__init__(context, ipaddresses_repository)

    def _address_query(
        self, subnet_id: UUID, address: str, status: IpAddressStatus
    ) -> QuerySpec:
        return QuerySpec(
            where=IPAddressClauseFactory.and_clauses(
                [
                    IPAddressClauseFactory.with_subnet_id(subnet_id),
                    IPAddressClauseFactory.with_address(address),
                    IPAddressClauseFactory.with_status(status),
                ]
            )
        )

    async def _guarded_update(
        self, query: QuerySpec, builder: IPAddressBuilder
    ) -> int:
        """Run the conditional status update, returning the affected rows.

        A concurrent transaction that changed the same row first makes the
        store abort ours instead of re-checking the condition: the row is
        not in the expected state any more, so nothing was updated.
        """
        try:
            return await self.update_where(query=query, builder=builder)
        except SerializationFailureException:
            logger.debug("Concurrent update on the same address")
            return 0

    async def allocate(
        self, subnet_id: UUID, address: str, hostname: str | None = None
    ) -> IPAddress:
        """Mark `address` of the subnet as allocated to `hostname`.

        The transition is a single conditional update on rows that are still
        available: among concurrent callers for the same address exactly one
        affects a row. Zero affected rows means the address is either
        unknown or already taken, and both are reported the same way.
        """
        if not address:
            raise ValidationException.build_for_field(
                "address",
                "The address to allocate is required.",
                type=MISSING_FIELD_VIOLATION_TYPE,
            )
        # An empty hostname is the same as no hostname.
        hostname = hostname or None
        if hostname is not None:
            try:
                validate_hostname(hostname)
            except ValueError as e:
                raise ValidationException.build_for_field(
                    "hostname", str(e), type=INVALID_HOSTNAME_VIOLATION_TYPE
                ) from e

        updated = await self._guarded_update(
            self._address_query(subnet_id, address, IpAddressStatus.AVAILABLE),
            IPAddressBuilder(
                status=IpAddressStatus.ALLOCATED, hostname=hostname
            ),
        )
        if updated == 0:
            logger.debug(
                "Address not available for allocation",
                subnet_id=str(subnet_id),
                address=address,
            )
            raise ConflictException.build(
                ADDRESS_NOT_AVAILABLE_VIOLATION_TYPE,
                f"The address {address} is not available or does not exist.",
            )
        logger.info(
            "Allocated address",
            subnet_id=str(subnet_id),
            address=address,
            hostname=hostname,
        )
        return await self.repository.get_one(
            query=self._address_query(
                subnet_id, address, IpAddressStatus.ALLOCATED
            )
        )

    async def release(self, subnet_id: UUID, address: str) -> IPAddress:
        """Return an allocated address to the available pool.

        Guarded like `allocate`, with the expected status reversed.
        """
        updated = await self._guarded_update(
            self._address_query(subnet_id, address, IpAddressStatus.ALLOCATED),
            IPAddressBuilder(
                status=IpAddressStatus.AVAILABLE, hostname=None
            ),
        )
        if updated == 0:
            raise ConflictException.build(
                ADDRESS_NOT_ALLOCATED_VIOLATION_TYPE,
                f"The address {address} is not allocated or does not exist.",
            )
        logger.info(
            "Released address", subnet_id=str(subnet_id), address=address
        )
        return await self.repository.get_one(
            query=self._address_query(
                subnet_id, address, IpAddressStatus.AVAILABLE
            )
        )

    async def get_available(self, subnet_id: UUID) -> list[IPAddress]:
        """Every available address of the subnet, in numeric order."""
        return await self.get_many(
            query=QuerySpec(
                where=IPAddressClauseFactory.and_clauses(
                    [
                        IPAddressClauseFactory.with_subnet_id(subnet_id),
                        IPAddressClauseFactory.with_status(
                            IpAddressStatus.AVAILABLE
                        ),
                    ]
                ),
                order_by=[IPAddressOrderByClauses.by_address()],
            )
        )

    async def delete_for_subnet(self, subnet_id: UUID) -> int:
        return await self.delete_many(
            query=QuerySpec(
                where=IPAddressClauseFactory.with_subnet_id(subnet_id)
            )
        )
