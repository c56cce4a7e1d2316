# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from typing import Optional, Union
from uuid import UUID

from ipamservicelayer.enums.ipaddress import IpAddressStatus
from ipamservicelayer.models.base import ResourceBuilder, Unset, UNSET


class IPAddressBuilder(ResourceBuilder):
    subnet_id: Union[UUID, Unset] = UNSET
    address: Union[str, Unset] = UNSET
    status: Union[IpAddressStatus, Unset] = UNSET
    hostname: Union[Optional[str], Unset] = UNSET
