# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

API_PREFIX = "/api"
V1_API_PREFIX = f"{API_PREFIX}/v1"
