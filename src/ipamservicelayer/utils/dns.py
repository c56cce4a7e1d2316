#  Copyright 2026 Canonical Ltd.  This software is licensed under the
#  GNU Affero General Public License version 3 (see the file LICENSE).

import re

# Labels are at most 63 octets long: alphanumeric, with hyphens only inside.
LABEL = r"[a-zA-Z0-9]([-a-zA-Z0-9]{0,61}[a-zA-Z0-9])?"
HOSTNAME = re.compile(rf"{LABEL}(\.{LABEL})*", re.ASCII)

MAX_HOSTNAME_LENGTH = 255


def validate_hostname(hostname: str) -> None:
    """Validator for hostnames.

    :param hostname: Input value for a hostname.  May include domain.
    :raise ValueError: If the hostname is not valid according to RFC 1123.
    """
    if len(hostname) > MAX_HOSTNAME_LENGTH:
        raise ValueError(
            "Hostname is too long.  Maximum allowed is 255 characters."
        )
    for label in hostname.split("."):
        if len(label) == 0:
            raise ValueError("Hostname contains an empty label.")
        if len(label) > 63:
            raise ValueError(
                "Label is too long: %r.  Maximum allowed is 63 characters."
                % label
            )
        if label.startswith("-") or label.endswith("-"):
            raise ValueError(
                "Label cannot start or end with hyphen: %r." % label
            )
    if not HOSTNAME.fullmatch(hostname):
        raise ValueError(
            "Hostname contains disallowed characters: %r." % hostname
        )
