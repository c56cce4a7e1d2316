# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from typing import Union

from ipamservicelayer.models.base import ResourceBuilder, Unset, UNSET


class SubnetBuilder(ResourceBuilder):
    cidr: Union[str, Unset] = UNSET
    name: Union[str, Unset] = UNSET
