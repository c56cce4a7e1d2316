#  Copyright 2026 Canonical Ltd.  This software is licensed under the
#  GNU Affero General Public License version 3 (see the file LICENSE).

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    desc,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    UniqueConstraint,
    Uuid,
)

METADATA = MetaData()

# Keep them in alphabetical order!

IPAddressTable = Table(
    "ipam_ipaddress",
    METADATA,
    Column("id", Uuid, primary_key=True),
    Column("created", DateTime(timezone=True), nullable=False),
    Column("updated", DateTime(timezone=True), nullable=False),
    Column(
        "subnet_id",
        Uuid,
        ForeignKey("ipam_subnet.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("address", String(15), nullable=False),
    # Unsigned integer value of `address`: ordering by it is numeric.
    Column("address_value", BigInteger, nullable=False),
    Column("status", String(16), nullable=False),
    Column("hostname", String(255), nullable=True),
    UniqueConstraint("subnet_id", "address"),
    Index("ipam_ipaddress_subnet_id_value_idx", "subnet_id", "address_value"),
    Index("ipam_ipaddress_subnet_id_status_idx", "subnet_id", "status"),
)

SubnetTable = Table(
    "ipam_subnet",
    METADATA,
    Column("id", Uuid, primary_key=True),
    Column("created", DateTime(timezone=True), nullable=False),
    Column("updated", DateTime(timezone=True), nullable=False),
    Column("cidr", String(18), nullable=False),
    Column("name", String(255), nullable=False),
    Index("ipam_subnet_created_idx", desc("created")),
)
