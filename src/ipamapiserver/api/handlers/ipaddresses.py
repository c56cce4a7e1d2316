# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from uuid import UUID

from fastapi import Depends

from ipamapiserver.api.base import Handler, handler
from ipamapiserver.api.models.requests.ipaddresses import (
    IPAddressAllocationRequest,
)
from ipamapiserver.api.models.responses.errors import ErrorBodyResponse
from ipamapiserver.api.models.responses.ipaddresses import IPAddressResponse
from ipamapiserver.middlewares.services import services
from ipamservicelayer.services import ServiceCollection


class IPAddressesHandler(Handler):
    """IP addresses API handler."""

    TAGS = ["IPAddresses"]

    @handler(
        path="/subnets/{subnet_id}/ips",
        methods=["POST"],
        tags=TAGS,
        responses={
            200: {"model": IPAddressResponse},
            409: {"model": ErrorBodyResponse},
        },
        status_code=200,
    )
    async def allocate_ipaddress(
        self,
        subnet_id: UUID,
        allocation_request: IPAddressAllocationRequest,
        services: ServiceCollection = Depends(services),  # noqa: B008
    ) -> IPAddressResponse:
        ip = await services.ipaddresses.allocate(
            subnet_id,
            allocation_request.address,
            hostname=allocation_request.hostname,
        )
        return IPAddressResponse.from_model(ip)

    @handler(
        path="/subnets/{subnet_id}/ips/{address}",
        methods=["DELETE"],
        tags=TAGS,
        responses={
            200: {"model": IPAddressResponse},
            409: {"model": ErrorBodyResponse},
        },
        status_code=200,
    )
    async def release_ipaddress(
        self,
        subnet_id: UUID,
        address: str,
        services: ServiceCollection = Depends(services),  # noqa: B008
    ) -> IPAddressResponse:
        ip = await services.ipaddresses.release(subnet_id, address)
        return IPAddressResponse.from_model(ip)
