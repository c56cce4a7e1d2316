# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

import pytest
from sqlalchemy.ext.asyncio import AsyncConnection

from ipamservicelayer.context import Context
from ipamservicelayer.services import ServiceCollection


@pytest.fixture
def context(db_connection: AsyncConnection) -> Context:
    return Context(connection=db_connection)


@pytest.fixture
async def services(context: Context) -> ServiceCollection:
    """The service layer."""
    return await ServiceCollection.produce(context)
