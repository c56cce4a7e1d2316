# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from uuid import UUID

from fastapi import Depends, Query, Response

from ipamapiserver.api.base import Handler, handler
from ipamapiserver.api.models.requests.subnets import SubnetRequest
from ipamapiserver.api.models.responses.errors import ErrorBodyResponse
from ipamapiserver.api.models.responses.subnets import (
    SubnetDetailResponse,
    SubnetResponse,
    SubnetsListResponse,
)
from ipamapiserver.middlewares.services import services
from ipamservicelayer.services import ServiceCollection


class SubnetsHandler(Handler):
    """Subnets API handler."""

    TAGS = ["Subnets"]

    @handler(
        path="/subnets",
        methods=["GET"],
        tags=TAGS,
        responses={
            200: {"model": SubnetsListResponse},
        },
        response_model_exclude_none=True,
        status_code=200,
    )
    async def list_subnets(
        self,
        services: ServiceCollection = Depends(services),  # noqa: B008
    ) -> SubnetsListResponse:
        subnets = await services.subnets.list_subnets()
        return SubnetsListResponse(
            items=[SubnetResponse.from_model(subnet) for subnet in subnets]
        )

    @handler(
        path="/subnets",
        methods=["POST"],
        tags=TAGS,
        responses={
            201: {"model": SubnetResponse},
            409: {"model": ErrorBodyResponse},
        },
        response_model_exclude_none=True,
        status_code=201,
    )
    async def create_subnet(
        self,
        subnet_request: SubnetRequest,
        services: ServiceCollection = Depends(services),  # noqa: B008
    ) -> SubnetResponse:
        subnet = await services.subnets.create_subnet(
            cidr=subnet_request.cidr, name=subnet_request.name
        )
        return SubnetResponse.from_model(subnet)

    @handler(
        path="/subnets/{subnet_id}",
        methods=["GET"],
        tags=TAGS,
        responses={
            200: {"model": SubnetDetailResponse},
            404: {"model": ErrorBodyResponse},
        },
        status_code=200,
    )
    async def get_subnet(
        self,
        subnet_id: UUID,
        # Kept as strings: invalid values fall back to the defaults.
        page: str | None = Query(default=None),
        size: str | None = Query(default=None),
        status: str | None = Query(default=None),
        services: ServiceCollection = Depends(services),  # noqa: B008
    ) -> SubnetDetailResponse:
        inventory = await services.inventory.get_page(
            subnet_id,
            page=page,
            size=size,
            status=status,
        )
        return SubnetDetailResponse.from_model(inventory)

    @handler(
        path="/subnets/{subnet_id}",
        methods=["DELETE"],
        tags=TAGS,
        responses={
            200: {},
        },
        status_code=200,
    )
    async def delete_subnet(
        self,
        subnet_id: UUID,
        services: ServiceCollection = Depends(services),  # noqa: B008
    ) -> Response:
        await services.subnets.delete_subnet(subnet_id)
        return Response(status_code=200)
