#  Copyright 2026 Canonical Ltd.  This software is licensed under the
#  GNU Affero General Public License version 3 (see the file LICENSE).

from typing import Iterator
from uuid import UUID

import structlog

from ipamservicelayer.builders.ipaddresses import IPAddressBuilder
from ipamservicelayer.builders.subnets import SubnetBuilder
from ipamservicelayer.context import Context
from ipamservicelayer.db.repositories.subnets import SubnetsRepository
from ipamservicelayer.enums.ipaddress import (
    AddressInsertPolicy,
    IpAddressStatus,
)
from ipamservicelayer.exceptions.catalog import (
    AlreadyExistsException,
    StoreFailureException,
    ValidationException,
)
from ipamservicelayer.exceptions.constants import (
    MISSING_FIELD_VIOLATION_TYPE,
    PREFIX_TOO_BROAD_VIOLATION_TYPE,
)
from ipamservicelayer.models.base import Unset
from ipamservicelayer.models.subnets import Subnet
from ipamservicelayer.services.base import BaseService
from ipamservicelayer.services.ipaddresses import IPAddressesService
from ipamservicelayer.utils.network import (
    parse_ipv4_network,
    usable_host_addresses,
)

# Subnets broader than /8 (more than 16 million addresses) are rejected to
# prevent resource exhaustion.
DEFAULT_MIN_IPV4_PREFIX = 8

logger = structlog.getLogger()


class SubnetsService(BaseService[Subnet, SubnetsRepository, SubnetBuilder]):
    def __init__(
        self,
        context: Context,
        ipaddresses_service: IPAddressesService,
        subnets_repository: SubnetsRepository,
        min_prefix_length: int = DEFAULT_MIN_IPV4_PREFIX,
        insert_policy: AddressInsertPolicy = AddressInsertPolicy.BEST_EFFORT,
    ):
        super().__init__(context, subnets_repository)
        self.ipaddresses_service = ipaddresses_service
        self.min_prefix_length = min_prefix_length
        self.insert_policy = insert_policy

    def _validate_required(self, builder: SubnetBuilder, field: str) -> str:
        value = getattr(builder, field)
        if isinstance(value, Unset) or not value.strip():
            raise ValidationException.build_for_field(
                field,
                f"The {field} of the subnet is required.",
                type=MISSING_FIELD_VIOLATION_TYPE,
            )
        return value

    async def pre_create_hook(self, builder: SubnetBuilder) -> None:
        cidr = self._validate_required(builder, "cidr")
        self._validate_required(builder, "name")
        network = parse_ipv4_network(cidr)
        if network.prefixlen < self.min_prefix_length:
            raise ValidationException.build_for_field(
                "cidr",
                f"CIDR prefix must be /{self.min_prefix_length} or longer "
                f"(e.g. /{self.min_prefix_length}, /24).",
                type=PREFIX_TOO_BROAD_VIOLATION_TYPE,
            )

    def _address_builders(self, subnet: Subnet) -> Iterator[IPAddressBuilder]:
        for address in usable_host_addresses(subnet.cidr):
            yield IPAddressBuilder(
                subnet_id=subnet.id,
                address=address,
                status=IpAddressStatus.AVAILABLE,
                hostname=None,
            )

    async def _insert_best_effort(self, subnet: Subnet) -> tuple[int, int]:
        inserted = skipped = 0
        for builder in self._address_builders(subnet):
            try:
                await self.ipaddresses_service.create(builder)
            except (AlreadyExistsException, StoreFailureException) as e:
                skipped += 1
                logger.warning(
                    "Failed to insert address, skipping it",
                    subnet_id=str(subnet.id),
                    address=builder.address,
                    error=str(e),
                )
            else:
                inserted += 1
        return inserted, skipped

    async def post_create_hook(self, resource: Subnet) -> None:
        if self.insert_policy == AddressInsertPolicy.ATOMIC:
            inserted = await self.ipaddresses_service.create_many(
                self._address_builders(resource)
            )
            skipped = 0
        else:
            inserted, skipped = await self._insert_best_effort(resource)
        logger.info(
            "Created subnet",
            subnet_id=str(resource.id),
            cidr=resource.cidr,
            addresses=inserted,
            skipped=skipped,
            insert_policy=str(self.insert_policy),
        )

    async def create_subnet(self, cidr: str | None, name: str | None) -> Subnet:
        """Create a subnet and every usable address of its CIDR.

        Inputs are validated before anything is written.
        """
        builder = SubnetBuilder()
        if cidr is not None:
            builder.cidr = cidr
        if name is not None:
            builder.name = name
        return await self.create(builder)

    async def post_delete_hook(self, resource: Subnet) -> None:
        # cascade delete
        await self.ipaddresses_service.delete_for_subnet(resource.id)

    async def delete_subnet(self, id: UUID) -> None:
        """Delete the subnet and its addresses. Unknown ids are ignored."""
        subnet = await self.delete_by_id(id)
        if subnet is not None:
            logger.info(
                "Deleted subnet", subnet_id=str(subnet.id), cidr=subnet.cidr
            )

    async def list_subnets(self) -> list[Subnet]:
        return await self.repository.get_all_newest_first()
