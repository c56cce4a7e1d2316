from .fixtures.app import api_app, api_client, api_config
from .fixtures.db import db, db_connection, test_config

__all__ = [
    "api_app",
    "api_client",
    "api_config",
    "db",
    "db_connection",
    "test_config",
]
