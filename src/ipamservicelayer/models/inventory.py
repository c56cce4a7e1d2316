#  Copyright 2026 Canonical Ltd.  This software is licensed under the
#  GNU Affero General Public License version 3 (see the file LICENSE).

from dataclasses import dataclass
from typing import Sequence

from pydantic import BaseModel

from ipamservicelayer.models.ipaddresses import IPAddress
from ipamservicelayer.models.subnets import Subnet


class PaginationMeta(BaseModel):
    page: int
    size: int
    total: int
    total_pages: int
    # Echo of the requested status filter ("" or "all" when unfiltered).
    status: str


@dataclass
class SubnetInventory:
    """A page of the addresses of a subnet, as shown in its detail view."""

    subnet: Subnet
    items: Sequence[IPAddress]
    # Every available address of the subnet, unpaginated.
    available: Sequence[IPAddress]
    pagination: PaginationMeta
