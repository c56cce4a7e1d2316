# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from uuid import uuid4

from ipamservicelayer.builders.subnets import SubnetBuilder
from ipamservicelayer.context import Context
from ipamservicelayer.db.repositories.subnets import SubnetsRepository
from ipamservicelayer.models.subnets import Subnet


class TestSubnetsRepository:
    async def test_create(self, context: Context):
        repository = SubnetsRepository(context)
        subnet = await repository.create(
            SubnetBuilder(cidr="10.0.0.0/24", name="lab")
        )
        assert isinstance(subnet, Subnet)
        assert subnet.cidr == "10.0.0.0/24"
        assert subnet.name == "lab"
        assert subnet.created == subnet.updated
        assert await repository.get_by_id(subnet.id) == subnet

    async def test_get_by_id_unknown(self, context: Context):
        repository = SubnetsRepository(context)
        assert await repository.get_by_id(uuid4()) is None

    async def test_get_all_newest_first(self, context: Context):
        repository = SubnetsRepository(context)
        first = await repository.create(
            SubnetBuilder(cidr="10.0.0.0/24", name="first")
        )
        second = await repository.create(
            SubnetBuilder(cidr="10.0.1.0/24", name="second")
        )
        subnets = await repository.get_all_newest_first()
        assert [subnet.id for subnet in subnets] == [second.id, first.id]

    async def test_get_all_newest_first_empty(self, context: Context):
        repository = SubnetsRepository(context)
        assert await repository.get_all_newest_first() == []

    async def test_delete_by_id(self, context: Context):
        repository = SubnetsRepository(context)
        subnet = await repository.create(
            SubnetBuilder(cidr="10.0.0.0/24", name="lab")
        )
        assert await repository.delete_by_id(subnet.id) == subnet
        assert await repository.get_by_id(subnet.id) is None
        assert await repository.delete_by_id(subnet.id) is None
