# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from ipamservicelayer.builders.ipaddresses import IPAddressBuilder
from ipamservicelayer.enums.ipaddress import IpAddressStatus
from ipamservicelayer.models.base import UNSET, Unset


class TestResourceBuilder:
    def test_populated_fields(self):
        builder = IPAddressBuilder(
            status=IpAddressStatus.ALLOCATED, hostname=None
        )
        assert builder.populated_fields() == {
            "status": IpAddressStatus.ALLOCATED,
            "hostname": None,
        }

    def test_unset(self):
        assert IPAddressBuilder().address == UNSET
        assert isinstance(IPAddressBuilder().hostname, Unset)
        assert IPAddressBuilder().populated_fields() == {}
