# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from datetime import datetime
from typing import Optional, Self
from uuid import UUID

from pydantic import BaseModel

from ipamservicelayer.enums.ipaddress import IpAddressStatus
from ipamservicelayer.models.ipaddresses import IPAddress


class IPAddressResponse(BaseModel):
    kind: str = "IPAddress"
    id: UUID
    subnet_id: UUID
    address: str
    status: IpAddressStatus
    hostname: Optional[str]
    created: datetime

    @classmethod
    def from_model(cls, ip: IPAddress) -> Self:
        return cls(
            id=ip.id,
            subnet_id=ip.subnet_id,
            address=ip.address,
            status=ip.status,
            hostname=ip.hostname,
            created=ip.created,
        )
