# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from typing import Optional

from pydantic import BaseModel, Field


class IPAddressAllocationRequest(BaseModel):
    address: Optional[str] = Field(
        default=None, description="The address to allocate, e.g. 10.0.0.5."
    )
    hostname: Optional[str] = Field(
        default=None,
        description="The RFC 1123 hostname of the host using the address.",
    )
