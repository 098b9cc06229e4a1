"""
Connection configuration lookup.

Connections are looked up by name. Explicitly registered connections win;
otherwise settings are read from environment variables (a `.env` file is
loaded on first lookup):

- <NAME>_HOST, <NAME>_PORT, <NAME>_USER, <NAME>_PASS, <NAME>_SCHEME

The connection used by a model defaults to the E_CONNECTION environment
variable, or "elasticsearch" when that is not set.
"""

import os
from typing import Dict, Optional

from dotenv import load_dotenv

from es_query_builder.core.models import ConnectionConfig

CONNECTION_ENV_VAR = "E_CONNECTION"
DEFAULT_CONNECTION = "elasticsearch"

_registry: Dict[str, ConnectionConfig] = {}
_dotenv_loaded = False


def _ensure_dotenv() -> None:
    global _dotenv_loaded
    if not _dotenv_loaded:
        load_dotenv()
        _dotenv_loaded = True


def default_connection_name() -> str:
    """Name of the connection models use when they do not set one."""
    _ensure_dotenv()
    return os.getenv(CONNECTION_ENV_VAR, DEFAULT_CONNECTION)


def register_connection(name: str, config: ConnectionConfig) -> None:
    """
    Register connection settings under a name.

    Args:
        name: Connection name models refer to
        config: Settings for the cluster
    """
    _registry[name] = config


def forget_connection(name: str) -> None:
    """Drop a registered connection; environment lookup applies again."""
    _registry.pop(name, None)


def get_connection_config(name: Optional[str] = None) -> ConnectionConfig:
    """
    Resolve settings for a named connection.

    Args:
        name: Connection name. Falls back to default_connection_name()

    Returns:
        ConnectionConfig for the connection
    """
    name = name or default_connection_name()
    if name in _registry:
        return _registry[name]

    _ensure_dotenv()
    prefix = name.upper().replace("-", "_").replace(".", "_")

    values = {
        "host": os.getenv(f"{prefix}_HOST"),
        "port": os.getenv(f"{prefix}_PORT"),
        "user": os.getenv(f"{prefix}_USER"),
        "pass": os.getenv(f"{prefix}_PASS"),
        "scheme": os.getenv(f"{prefix}_SCHEME"),
    }
    # Unset variables keep the model defaults
    return ConnectionConfig(**{k: v for k, v in values.items() if v is not None})
