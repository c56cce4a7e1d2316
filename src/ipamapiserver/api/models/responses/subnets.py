# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from datetime import datetime
from typing import Self
from uuid import UUID

from pydantic import BaseModel

from ipamapiserver.api.models.responses.ipaddresses import IPAddressResponse
from ipamservicelayer.models.inventory import PaginationMeta, SubnetInventory
from ipamservicelayer.models.subnets import Subnet


class SubnetResponse(BaseModel):
    kind: str = "Subnet"
    id: UUID
    cidr: str
    name: str
    created: datetime

    @classmethod
    def from_model(cls, subnet: Subnet) -> Self:
        return cls(
            id=subnet.id,
            cidr=subnet.cidr,
            name=subnet.name,
            created=subnet.created,
        )


class SubnetsListResponse(BaseModel):
    kind: str = "SubnetsList"
    items: list[SubnetResponse]


class SubnetDetailResponse(BaseModel):
    kind: str = "SubnetDetail"
    subnet: SubnetResponse
    items: list[IPAddressResponse]
    available: list[IPAddressResponse]
    pagination: PaginationMeta

    @classmethod
    def from_model(cls, inventory: SubnetInventory) -> Self:
        return cls(
            subnet=SubnetResponse.from_model(inventory.subnet),
            items=[
                IPAddressResponse.from_model(ip) for ip in inventory.items
            ],
            available=[
                IPAddressResponse.from_model(ip) for ip in inventory.available
            ],
            pagination=inventory.pagination,
        )
