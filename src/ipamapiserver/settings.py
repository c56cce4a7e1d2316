# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any, Mapping

import structlog
import yaml

from ipamservicelayer.db import DatabaseConfig
from ipamservicelayer.enums.ipaddress import AddressInsertPolicy
from ipamservicelayer.services import ServicesSettings
from ipamservicelayer.services.subnets import DEFAULT_MIN_IPV4_PREFIX

logger = structlog.getLogger()

DEFAULT_CONFIG_PATH = "/etc/ipam/ipam.yaml"
DEFAULT_DATABASE_URL = (
    "postgresql+asyncpg://ipam_user:change_me_in_production"
    "@localhost:5432/ipam_db"
)
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080


class ConfigError(Exception):
    """The configuration can't be loaded."""


@dataclass
class Config:
    db: DatabaseConfig
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    debug: bool = False
    debug_queries: bool = False
    services: ServicesSettings = field(default_factory=ServicesSettings)


def config_path() -> Path:
    """Return the path of the configuration file."""
    return Path(os.getenv("IPAM_CONFIG", DEFAULT_CONFIG_PATH))


def _load_file(path: Path) -> dict[str, Any]:
    try:
        with path.open() as f:
            content = yaml.safe_load(f)
    except FileNotFoundError:
        logger.debug("No configuration file found", path=str(path))
        return {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid configuration file {path}: {e}") from e
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigError(f"Invalid configuration file {path}: not a mapping")
    return content


def _as_int(values: Mapping[str, Any], key: str, default: int) -> int:
    value = values.get(key, default)
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"'{key}' must be an integer, got {value!r}") from e


def build_config(
    values: Mapping[str, Any], environ: Mapping[str, str] | None = None
) -> Config:
    """Build the configuration from the file content and the environment.

    `DATABASE_URL`, `HOST` and `PORT` from the environment take precedence
    over the file.
    """
    environ = os.environ if environ is None else environ
    values = dict(values)
    for env_name, key in (
        ("DATABASE_URL", "database_url"),
        ("HOST", "host"),
        ("PORT", "port"),
    ):
        if env_value := environ.get(env_name):
            values[key] = env_value

    min_prefix_length = _as_int(
        values, "min_prefix_length", DEFAULT_MIN_IPV4_PREFIX
    )
    if not 0 <= min_prefix_length <= 32:
        raise ConfigError(
            f"'min_prefix_length' must be between 0 and 32, got {min_prefix_length}"
        )
    policy = values.get(
        "address_insert_policy", AddressInsertPolicy.BEST_EFFORT
    )
    try:
        insert_policy = AddressInsertPolicy(policy)
    except ValueError as e:
        raise ConfigError(
            f"'address_insert_policy' must be one of "
            f"{', '.join(p.value for p in AddressInsertPolicy)}, got {policy!r}"
        ) from e

    debug = bool(values.get("debug", False))
    return Config(
        db=DatabaseConfig.from_url(
            str(values.get("database_url", DEFAULT_DATABASE_URL))
        ),
        host=str(values.get("host", DEFAULT_HOST)),
        port=_as_int(values, "port", DEFAULT_PORT),
        debug=debug,
        debug_queries=debug or bool(values.get("debug_queries", False)),
        services=ServicesSettings(
            min_prefix_length=min_prefix_length,
            address_insert_policy=insert_policy,
        ),
    )


def read_config(path: Path | None = None) -> Config:
    return build_config(_load_file(path or config_path()))
