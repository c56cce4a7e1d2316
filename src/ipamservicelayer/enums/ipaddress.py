#  Copyright 2026 Canonical Ltd.  This software is licensed under the
#  GNU Affero General Public License version 3 (see the file LICENSE).

from enum import StrEnum


class IpAddressStatus(StrEnum):
    """The vocabulary of possible states of an `IPAddress`."""

    # Materialized when the subnet is created, free to be handed out.
    AVAILABLE = "available"

    # Handed out to a host. Only reachable from AVAILABLE through a single
    # conditional update.
    ALLOCATED = "allocated"


class AddressInsertPolicy(StrEnum):
    """How the addresses of a new subnet are written to the store."""

    # One insert per address; a failing address is logged and skipped.
    BEST_EFFORT = "best-effort"

    # Batched inserts; any failure aborts the whole subnet creation.
    ATOMIC = "atomic"
