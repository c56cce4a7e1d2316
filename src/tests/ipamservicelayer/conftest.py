from tests.ipamapiserver.fixtures.db import db, db_connection, test_config
from tests.ipamservicelayer.fixtures import context, services

__all__ = [
    "context",
    "db",
    "db_connection",
    "services",
    "test_config",
]
