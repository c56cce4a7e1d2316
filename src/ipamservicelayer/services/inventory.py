#  Copyright 2026 Canonical Ltd.  This software is licensed under the
#  GNU Affero General Public License version 3 (see the file LICENSE).

import math
from typing import Any
from uuid import UUID

from ipamservicelayer.context import Context
from ipamservicelayer.db.filters import QuerySpec
from ipamservicelayer.db.repositories.ipaddresses import (
    IPAddressClauseFactory,
    IPAddressOrderByClauses,
)
from ipamservicelayer.exceptions.catalog import (
    BaseExceptionDetail,
    NotFoundException,
)
from ipamservicelayer.exceptions.constants import (
    UNEXISTING_RESOURCE_VIOLATION_TYPE,
)
from ipamservicelayer.models.inventory import PaginationMeta, SubnetInventory
from ipamservicelayer.services.base import Service
from ipamservicelayer.services.ipaddresses import IPAddressesService
from ipamservicelayer.services.subnets import SubnetsService

DEFAULT_PAGE_SIZE = 30
VALID_PAGE_SIZES = frozenset({30, 50, 100})

# Offsets are signed 64-bit integers in the store.
MAX_OFFSET = 2**63 - 1
MAX_PAGE = MAX_OFFSET // max(VALID_PAGE_SIZES) + 1

# Status filter value meaning "no filter".
ALL_STATUSES = "all"


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def normalize_page(value: Any) -> int:
    """Pages start at 1; anything else falls back to the first page.

    So does a page whose offset the store could not represent.
    """
    page = _as_int(value)
    return page if page is not None and 0 < page <= MAX_PAGE else 1


def normalize_page_size(value: Any) -> int:
    size = _as_int(value)
    return size if size in VALID_PAGE_SIZES else DEFAULT_PAGE_SIZE


def normalize_status(value: str | None) -> str:
    return "" if not value or value == ALL_STATUSES else value


class InventoryService(Service):
    """Paginated view over the addresses of a subnet."""

    def __init__(
        self,
        context: Context,
        subnets_service: SubnetsService,
        ipaddresses_service: IPAddressesService,
    ):
        super().__init__(context)
        self.subnets_service = subnets_service
        self.ipaddresses_service = ipaddresses_service

    async def get_page(
        self,
        subnet_id: UUID,
        page: Any = 1,
        size: Any = DEFAULT_PAGE_SIZE,
        status: str | None = None,
    ) -> SubnetInventory:
        """Return a page of the addresses of a subnet, in numeric order.

        `page` and `size` may come straight from a query string: invalid
        values fall back to the first page and the default size. A `status`
        other than empty or "all" restricts both the page and the total
        count.
        """
        subnet = await self.subnets_service.get_by_id(subnet_id)
        if subnet is None:
            raise NotFoundException(
                details=[
                    BaseExceptionDetail(
                        type=UNEXISTING_RESOURCE_VIOLATION_TYPE,
                        message=f"Subnet with id {subnet_id} does not exist.",
                    )
                ]
            )

        page = normalize_page(page)
        size = normalize_page_size(size)
        status_filter = normalize_status(status)

        clauses = [IPAddressClauseFactory.with_subnet_id(subnet_id)]
        if status_filter:
            clauses.append(IPAddressClauseFactory.with_status(status_filter))
        addresses = await self.ipaddresses_service.list(
            page=page,
            size=size,
            query=QuerySpec(
                where=IPAddressClauseFactory.and_clauses(clauses),
                order_by=[IPAddressOrderByClauses.by_address()],
            ),
        )
        available = await self.ipaddresses_service.get_available(subnet_id)

        return SubnetInventory(
            subnet=subnet,
            items=addresses.items,
            available=available,
            pagination=PaginationMeta(
                page=page,
                size=size,
                total=addresses.total,
                total_pages=max(1, math.ceil(addresses.total / size)),
                status=status or "",
            ),
        )
