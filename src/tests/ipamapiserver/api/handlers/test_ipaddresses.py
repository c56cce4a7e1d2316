# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from uuid import uuid4

from httpx import AsyncClient
import pytest

from ipamapiserver.constants import V1_API_PREFIX
from ipamservicelayer.exceptions.constants import (
    ADDRESS_NOT_ALLOCATED_VIOLATION_TYPE,
    ADDRESS_NOT_AVAILABLE_VIOLATION_TYPE,
    INVALID_HOSTNAME_VIOLATION_TYPE,
    MISSING_FIELD_VIOLATION_TYPE,
)

SUBNETS_URL = f"{V1_API_PREFIX}/subnets"


@pytest.fixture
async def subnet_id(api_client: AsyncClient) -> str:
    response = await api_client.post(
        SUBNETS_URL, json={"cidr": "10.0.0.0/29", "name": "lab"}
    )
    assert response.status_code == 201
    return response.json()["id"]


class TestIPAddressesApi:
    async def test_allocate(self, api_client: AsyncClient, subnet_id: str):
        response = await api_client.post(
            f"{SUBNETS_URL}/{subnet_id}/ips",
            json={"address": "10.0.0.5", "hostname": "web-01"},
        )
        assert response.status_code == 200
        ip = response.json()
        assert ip["kind"] == "IPAddress"
        assert ip["address"] == "10.0.0.5"
        assert ip["status"] == "allocated"
        assert ip["hostname"] == "web-01"
        assert ip["subnet_id"] == subnet_id

        detail = (await api_client.get(f"{SUBNETS_URL}/{subnet_id}")).json()
        assert "10.0.0.5" not in [a["address"] for a in detail["available"]]

    async def test_allocate_without_hostname(
        self, api_client: AsyncClient, subnet_id: str
    ):
        response = await api_client.post(
            f"{SUBNETS_URL}/{subnet_id}/ips", json={"address": "10.0.0.5"}
        )
        assert response.status_code == 200
        assert response.json()["hostname"] is None

    async def test_allocate_twice(
        self, api_client: AsyncClient, subnet_id: str
    ):
        url = f"{SUBNETS_URL}/{subnet_id}/ips"
        response = await api_client.post(
            url, json={"address": "10.0.0.5", "hostname": "web-01"}
        )
        assert response.status_code == 200
        response = await api_client.post(
            url, json={"address": "10.0.0.5", "hostname": "web-02"}
        )
        assert response.status_code == 409
        error = response.json()
        assert error["code"] == 409
        assert (
            error["details"][0]["type"] == ADDRESS_NOT_AVAILABLE_VIOLATION_TYPE
        )

    async def test_allocate_unknown_address(
        self, api_client: AsyncClient, subnet_id: str
    ):
        response = await api_client.post(
            f"{SUBNETS_URL}/{subnet_id}/ips", json={"address": "192.0.2.1"}
        )
        assert response.status_code == 409

    async def test_allocate_unknown_subnet(self, api_client: AsyncClient):
        response = await api_client.post(
            f"{SUBNETS_URL}/{uuid4()}/ips", json={"address": "10.0.0.5"}
        )
        assert response.status_code == 409

    async def test_allocate_invalid_hostname(
        self, api_client: AsyncClient, subnet_id: str
    ):
        response = await api_client.post(
            f"{SUBNETS_URL}/{subnet_id}/ips",
            json={"address": "10.0.0.5", "hostname": "-web"},
        )
        assert response.status_code == 400
        details = response.json()["details"]
        assert details[0]["type"] == INVALID_HOSTNAME_VIOLATION_TYPE
        assert details[0]["field"] == "hostname"

        detail = (await api_client.get(f"{SUBNETS_URL}/{subnet_id}")).json()
        assert "10.0.0.5" in [a["address"] for a in detail["available"]]

    async def test_allocate_missing_address(
        self, api_client: AsyncClient, subnet_id: str
    ):
        response = await api_client.post(
            f"{SUBNETS_URL}/{subnet_id}/ips", json={"hostname": "web-01"}
        )
        assert response.status_code == 400
        assert (
            response.json()["details"][0]["type"]
            == MISSING_FIELD_VIOLATION_TYPE
        )

    async def test_release(self, api_client: AsyncClient, subnet_id: str):
        await api_client.post(
            f"{SUBNETS_URL}/{subnet_id}/ips",
            json={"address": "10.0.0.5", "hostname": "web-01"},
        )
        response = await api_client.delete(
            f"{SUBNETS_URL}/{subnet_id}/ips/10.0.0.5"
        )
        assert response.status_code == 200
        assert response.json()["status"] == "available"
        assert response.json()["hostname"] is None

    async def test_release_not_allocated(
        self, api_client: AsyncClient, subnet_id: str
    ):
        response = await api_client.delete(
            f"{SUBNETS_URL}/{subnet_id}/ips/10.0.0.5"
        )
        assert response.status_code == 409
        assert (
            response.json()["details"][0]["type"]
            == ADDRESS_NOT_ALLOCATED_VIOLATION_TYPE
        )

    async def test_status_filter(self, api_client: AsyncClient, subnet_id: str):
        for address in ("10.0.0.6", "10.0.0.2"):
            await api_client.post(
                f"{SUBNETS_URL}/{subnet_id}/ips", json={"address": address}
            )
        response = await api_client.get(
            f"{SUBNETS_URL}/{subnet_id}", params={"status": "allocated"}
        )
        detail = response.json()
        assert [a["address"] for a in detail["items"]] == [
            "10.0.0.2",
            "10.0.0.6",
        ]
        assert detail["pagination"]["total"] == 2
        assert detail["pagination"]["status"] == "allocated"
        assert len(detail["available"]) == 4
