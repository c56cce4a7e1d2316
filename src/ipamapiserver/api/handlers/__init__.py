# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from ipamapiserver.api.base import API
from ipamapiserver.api.handlers.ipaddresses import IPAddressesHandler
from ipamapiserver.api.handlers.subnets import SubnetsHandler
from ipamapiserver.constants import V1_API_PREFIX

APIv1 = API(
    prefix=V1_API_PREFIX,
    handlers=[
        IPAddressesHandler(),
        SubnetsHandler(),
    ],
)
