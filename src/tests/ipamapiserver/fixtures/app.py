# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from typing import AsyncIterator

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
import pytest

from ipamapiserver.app import create_app
from ipamapiserver.settings import Config
from ipamservicelayer.db import Database, DatabaseConfig


@pytest.fixture
def api_config(test_config: DatabaseConfig) -> Config:
    return Config(db=test_config)


@pytest.fixture
def api_app(api_config: Config, db: Database) -> FastAPI:
    """The API application."""
    return create_app(api_config, db).fastapi_app


@pytest.fixture
async def api_client(api_app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Client for the API."""
    async with AsyncClient(
        transport=ASGITransport(app=api_app), base_url="http://test"
    ) as client:
        yield client
