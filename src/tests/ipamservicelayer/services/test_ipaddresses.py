# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from unittest.mock import Mock
from uuid import uuid4

import pytest

from ipamservicelayer.builders.ipaddresses import IPAddressBuilder
from ipamservicelayer.context import Context
from ipamservicelayer.db.repositories.ipaddresses import IPAddressesRepository
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
from ipamservicelayer.services import ServiceCollection
from ipamservicelayer.services.ipaddresses import IPAddressesService
from ipamservicelayer.utils.date import utcnow


def _service() -> IPAddressesService:
    return IPAddressesService(
        context=Context(),
        ipaddresses_repository=Mock(IPAddressesRepository),
    )


def _ip(status: IpAddressStatus, hostname: str | None = None) -> IPAddress:
    now = utcnow()
    return IPAddress(
        id=uuid4(),
        created=now,
        updated=now,
        subnet_id=uuid4(),
        address="10.0.0.5",
        status=status,
        hostname=hostname,
    )


class TestIPAddressesService:
    async def test_allocate(self):
        service = _service()
        allocated = _ip(IpAddressStatus.ALLOCATED, "web-01")
        service.repository.update_where.return_value = 1
        service.repository.get_one.return_value = allocated
        subnet_id = uuid4()

        assert (
            await service.allocate(subnet_id, "10.0.0.5", "web-01")
            == allocated
        )
        kwargs = service.repository.update_where.call_args.kwargs
        assert kwargs["builder"] == IPAddressBuilder(
            status=IpAddressStatus.ALLOCATED, hostname="web-01"
        )
        assert kwargs["query"] == service._address_query(
            subnet_id, "10.0.0.5", IpAddressStatus.AVAILABLE
        )

    async def test_allocate_empty_hostname_is_no_hostname(self):
        service = _service()
        service.repository.update_where.return_value = 1
        await service.allocate(uuid4(), "10.0.0.5", "")
        kwargs = service.repository.update_where.call_args.kwargs
        assert kwargs["builder"] == IPAddressBuilder(
            status=IpAddressStatus.ALLOCATED, hostname=None
        )

    async def test_allocate_not_available(self):
        service = _service()
        service.repository.update_where.return_value = 0
        with pytest.raises(ConflictException) as e:
            await service.allocate(uuid4(), "10.0.0.5", "web-01")
        assert e.value.details[0].type == ADDRESS_NOT_AVAILABLE_VIOLATION_TYPE
        service.repository.get_one.assert_not_called()

    async def test_allocate_concurrent_update_is_a_conflict(self):
        service = _service()
        service.repository.update_where.side_effect = (
            SerializationFailureException()
        )
        with pytest.raises(ConflictException) as e:
            await service.allocate(uuid4(), "10.0.0.5", "web-01")
        assert e.value.details[0].type == ADDRESS_NOT_AVAILABLE_VIOLATION_TYPE
        service.repository.get_one.assert_not_called()

    @pytest.mark.parametrize("hostname", ["-bad", "bad_host", "a" * 64])
    async def test_allocate_invalid_hostname(self, hostname):
        service = _service()
        with pytest.raises(ValidationException) as e:
            await service.allocate(uuid4(), "10.0.0.5", hostname)
        assert e.value.details[0].type == INVALID_HOSTNAME_VIOLATION_TYPE
        assert e.value.details[0].field == "hostname"
        service.repository.update_where.assert_not_called()

    async def test_allocate_missing_address(self):
        service = _service()
        with pytest.raises(ValidationException) as e:
            await service.allocate(uuid4(), "", "web-01")
        assert e.value.details[0].type == MISSING_FIELD_VIOLATION_TYPE
        service.repository.update_where.assert_not_called()

    async def test_release(self):
        service = _service()
        available = _ip(IpAddressStatus.AVAILABLE)
        service.repository.update_where.return_value = 1
        service.repository.get_one.return_value = available
        assert await service.release(uuid4(), "10.0.0.5") == available
        kwargs = service.repository.update_where.call_args.kwargs
        assert kwargs["builder"] == IPAddressBuilder(
            status=IpAddressStatus.AVAILABLE, hostname=None
        )

    async def test_release_not_allocated(self):
        service = _service()
        service.repository.update_where.return_value = 0
        with pytest.raises(ConflictException) as e:
            await service.release(uuid4(), "10.0.0.5")
        assert e.value.details[0].type == ADDRESS_NOT_ALLOCATED_VIOLATION_TYPE

    async def test_release_concurrent_update_is_a_conflict(self):
        service = _service()
        service.repository.update_where.side_effect = (
            SerializationFailureException()
        )
        with pytest.raises(ConflictException) as e:
            await service.release(uuid4(), "10.0.0.5")
        assert e.value.details[0].type == ADDRESS_NOT_ALLOCATED_VIOLATION_TYPE


class TestIPAddressesServiceWithDatabase:
    async def test_allocate(self, services: ServiceCollection):
        subnet = await services.subnets.create_subnet("10.0.0.0/29", "lab")
        ip = await services.ipaddresses.allocate(
            subnet.id, "10.0.0.5", "web-01"
        )
        assert ip.status == IpAddressStatus.ALLOCATED
        assert ip.hostname == "web-01"
        available = await services.ipaddresses.get_available(subnet.id)
        assert "10.0.0.5" not in [ip.address for ip in available]
        assert len(available) == 5

    async def test_allocate_twice(self, services: ServiceCollection):
        subnet = await services.subnets.create_subnet("10.0.0.0/29", "lab")
        await services.ipaddresses.allocate(subnet.id, "10.0.0.5", "web-01")
        with pytest.raises(ConflictException):
            await services.ipaddresses.allocate(
                subnet.id, "10.0.0.5", "web-02"
            )
        page = await services.inventory.get_page(
            subnet.id, status="allocated"
        )
        assert [(ip.address, ip.hostname) for ip in page.items] == [
            ("10.0.0.5", "web-01")
        ]

    async def test_allocate_address_outside_the_subnet(
        self, services: ServiceCollection
    ):
        subnet = await services.subnets.create_subnet("10.0.0.0/29", "lab")
        with pytest.raises(ConflictException):
            await services.ipaddresses.allocate(subnet.id, "10.0.0.0", None)
        with pytest.raises(ConflictException):
            await services.ipaddresses.allocate(subnet.id, "10.9.9.9", None)

    async def test_allocate_in_another_subnet(
        self, services: ServiceCollection
    ):
        await services.subnets.create_subnet("10.0.0.0/29", "lab")
        with pytest.raises(ConflictException):
            await services.ipaddresses.allocate(uuid4(), "10.0.0.5", None)

    async def test_invalid_hostname_leaves_the_address_available(
        self, services: ServiceCollection
    ):
        subnet = await services.subnets.create_subnet("10.0.0.0/29", "lab")
        with pytest.raises(ValidationException):
            await services.ipaddresses.allocate(
                subnet.id, "10.0.0.5", "not a hostname"
            )
        available = await services.ipaddresses.get_available(subnet.id)
        assert "10.0.0.5" in [ip.address for ip in available]

    async def test_release(self, services: ServiceCollection):
        subnet = await services.subnets.create_subnet("10.0.0.0/29", "lab")
        await services.ipaddresses.allocate(subnet.id, "10.0.0.5", "web-01")
        ip = await services.ipaddresses.release(subnet.id, "10.0.0.5")
        assert ip.status == IpAddressStatus.AVAILABLE
        assert ip.hostname is None
        with pytest.raises(ConflictException):
            await services.ipaddresses.release(subnet.id, "10.0.0.5")
        # Released addresses can be allocated again.
        await services.ipaddresses.allocate(subnet.id, "10.0.0.5", "web-02")
