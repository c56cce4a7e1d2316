# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

# Generic
UNIQUE_CONSTRAINT_VIOLATION_TYPE = "UniqueConstraintViolation"
UNEXISTING_RESOURCE_VIOLATION_TYPE = "UnexistingResourceViolation"
INVALID_ARGUMENT_VIOLATION_TYPE = "InvalidArgumentViolation"
MISSING_FIELD_VIOLATION_TYPE = "MissingFieldViolation"
STORE_FAILURE_VIOLATION_TYPE = "StoreFailureViolation"

# Subnets
INVALID_CIDR_VIOLATION_TYPE = "InvalidCIDRViolation"
PREFIX_TOO_BROAD_VIOLATION_TYPE = "PrefixTooBroadViolation"

# IP addresses
INVALID_HOSTNAME_VIOLATION_TYPE = "InvalidHostnameViolation"
ADDRESS_NOT_AVAILABLE_VIOLATION_TYPE = "AddressNotAvailableViolation"
ADDRESS_NOT_ALLOCATED_VIOLATION_TYPE = "AddressNotAllocatedViolation"
