# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from dataclasses import dataclass
from typing import Self

from ipamservicelayer.context import Context
from ipamservicelayer.db.repositories.ipaddresses import IPAddressesRepository
from ipamservicelayer.db.repositories.subnets import SubnetsRepository
from ipamservicelayer.enums.ipaddress import AddressInsertPolicy
from ipamservicelayer.services.inventory import InventoryService
from ipamservicelayer.services.ipaddresses import IPAddressesService
from ipamservicelayer.services.subnets import (
    DEFAULT_MIN_IPV4_PREFIX,
    SubnetsService,
)


@dataclass
class ServicesSettings:
    """Settings shared by the services of every request."""

    min_prefix_length: int = DEFAULT_MIN_IPV4_PREFIX
    address_insert_policy: AddressInsertPolicy = (
        AddressInsertPolicy.BEST_EFFORT
    )


class ServiceCollection:
    """Provide all the services bound to a single context."""

    # Keep them in alphabetical order, please
    inventory: InventoryService
    ipaddresses: IPAddressesService
    subnets: SubnetsService

    @classmethod
    async def produce(
        cls,
        context: Context,
        settings: ServicesSettings | None = None,
    ) -> Self:
        settings = settings or ServicesSettings()
        services = cls()
        services.ipaddresses = IPAddressesService(
            context=context,
            ipaddresses_repository=IPAddressesRepository(context),
        )
        services.subnets = SubnetsService(
            context=context,
            ipaddresses_service=services.ipaddresses,
            subnets_repository=SubnetsRepository(context),
            min_prefix_length=settings.min_prefix_length,
            insert_policy=settings.address_insert_policy,
        )
        services.inventory = InventoryService(
            context=context,
            subnets_service=services.subnets,
            ipaddresses_service=services.ipaddresses,
        )
        return services
