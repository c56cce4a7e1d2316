# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from ipamservicelayer.models.base import IpamTimestampedBaseModel


class Subnet(IpamTimestampedBaseModel):
    # Stored as supplied by the user, host bits included.
    cidr: str
    name: str
