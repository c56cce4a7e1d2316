# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from typing import Optional

from pydantic import BaseModel, Field


class SubnetRequest(BaseModel):
    # Both are required, but the service reports missing values with its own
    # violation type, so they are optional here.
    cidr: Optional[str] = Field(
        default=None, description="The IPv4 network, e.g. 192.168.0.0/24."
    )
    name: Optional[str] = Field(
        default=None, description="The display name of the subnet."
    )
