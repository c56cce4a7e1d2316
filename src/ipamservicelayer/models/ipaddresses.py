#  Copyright 2026 Canonical Ltd.  This software is licensed under the
#  GNU Affero General Public License version 3 (see the file LICENSE).

from typing import Optional
from uuid import UUID

from ipamservicelayer.enums.ipaddress import IpAddressStatus
from ipamservicelayer.models.base import IpamTimestampedBaseModel


class IPAddress(IpamTimestampedBaseModel):
    subnet_id: UUID
    address: str
    status: IpAddressStatus
    hostname: Optional[str] = None
