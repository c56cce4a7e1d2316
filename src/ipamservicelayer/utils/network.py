#  Copyright 2026 Canonical Ltd.  This software is licensed under the
#  GNU Affero General Public License version 3 (see the file LICENSE).

"""Helpers for enumerating the addresses of IPv4 networks with `netaddr`."""

import re
from typing import Iterator

from netaddr import IPAddress, IPNetwork

from ipamservicelayer.exceptions.catalog import ValidationException
from ipamservicelayer.exceptions.constants import INVALID_CIDR_VIOLATION_TYPE

# Networks with at most this many addresses (/31, /32) have no network or
# broadcast address to exclude.
POINT_TO_POINT_SIZE = 2

_OCTET = r"(25[0-5]|2[0-4][0-9]|1[0-9]{2}|[1-9]?[0-9])"
_IPV4_CIDR_RE = re.compile(
    rf"{_OCTET}(\.{_OCTET}){{3}}/(3[0-2]|[12]?[0-9])", re.ASCII
)


def _invalid_cidr(cidr: str, reason: str) -> ValidationException:
    return ValidationException.build_for_field(
        "cidr",
        f"Invalid CIDR {cidr!r}: {reason}.",
        type=INVALID_CIDR_VIOLATION_TYPE,
    )


def parse_ipv4_network(cidr: str) -> IPNetwork:
    """Parse `cidr` as an IPv4 address and prefix length.

    Host bits are allowed to be set (`10.0.0.5/24` denotes `10.0.0.0/24`),
    but the address must be a dotted quad without leading zeros and the
    prefix length must be given explicitly.

    :raise ValidationException: if `cidr` is not an IPv4 network.
    """
    if ":" in cidr:
        raise _invalid_cidr(cidr, "IPv6 networks are not supported")
    if not _IPV4_CIDR_RE.fullmatch(cidr):
        raise _invalid_cidr(
            cidr, "expected an IPv4 address and a prefix length"
        )
    return IPNetwork(cidr).cidr


def enumerate_addresses(cidr: str) -> Iterator[str]:
    """Yield every address of `cidr` in ascending numeric order.

    Network and broadcast addresses are included. The first address is the
    supplied address with the host bits cleared, and the iteration stops at
    the last address of the block, so `255.255.255.255/32` yields once.
    """
    network = parse_ipv4_network(cidr)
    for value in range(network.first, network.last + 1):
        yield str(IPAddress(value, 4))


def usable_host_addresses(cidr: str) -> Iterator[str]:
    """Yield the addresses of `cidr` that can be assigned to hosts.

    For networks larger than a point-to-point link the network address and
    the broadcast address are dropped.
    """
    network = parse_ipv4_network(cidr)
    first, last = network.first, network.last
    if network.size > POINT_TO_POINT_SIZE:
        first, last = first + 1, last - 1
    for value in range(first, last + 1):
        yield str(IPAddress(value, 4))


def address_value(address: str) -> int:
    """The unsigned integer value of an IPv4 address, for numeric ordering."""
    return int(IPAddress(address, 4))
