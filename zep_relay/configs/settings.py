"""
Zep Relay Settings

Merges defaults, YAML config, and environment variables into one immutable
RelaySettings value. The relay receives it at construction and never
mutates it.
"""

import os
from dataclasses import dataclass, replace
from typing import Any, Optional

from zep_relay.configs.constants import (
    DEFAULT_BACKEND_URL,
    DEFAULT_HOST,
    DEFAULT_PORT,
    MESSAGES_PATH,
    SESSION_MAX_BYTES,
    SESSION_MAX_LINES,
    SESSION_PATH,
    get_timeout,
)
from zep_relay.configs.yaml_config import load_yaml_config
from zep_relay.exceptions import ConfigurationError


@dataclass(frozen=True)
class RelaySettings:
    """Process-wide relay configuration."""

    backend_url: str = DEFAULT_BACKEND_URL
    session_timeout: float = get_timeout("session_acquire")
    rpc_timeout: float = get_timeout("rpc_call")
    connect_timeout: float = get_timeout("http_connect")
    session_max_lines: int = SESSION_MAX_LINES
    session_max_bytes: int = SESSION_MAX_BYTES
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    debug: bool = False

    def __post_init__(self) -> None:
        if not self.backend_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"backend_url must be an http(s) URL, got {self.backend_url!r}"
            )
        # Endpoint paths carry their own leading slash
        object.__setattr__(self, "backend_url", self.backend_url.rstrip("/"))
        for name in ("session_timeout", "rpc_timeout", "connect_timeout"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive")
        if self.session_max_lines <= 0 or self.session_max_bytes <= 0:
            raise ConfigurationError("session read limits must be positive")

    @property
    def session_url(self) -> str:
        return f"{self.backend_url}{SESSION_PATH}"

    @property
    def messages_url(self) -> str:
        return f"{self.backend_url}{MESSAGES_PATH}"

    def with_overrides(self, **changes: Any) -> "RelaySettings":
        """Return a copy with the given fields replaced (None values skipped)."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).lower() in ("true", "1", "yes")


def _parse_number(name: str, value: Any, kind: type) -> Any:
    try:
        return kind(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid value for {name}: {value!r}") from e


def load_settings(yaml_config: Optional[dict] = None) -> RelaySettings:
    """
    Build RelaySettings merged from defaults, YAML, and environment.

    Priority (highest wins):
    1. Environment variables (ZEP_RELAY_*)
    2. YAML config file
    3. Defaults

    Args:
        yaml_config: Pre-loaded YAML mapping. Loaded from disk when None.

    Returns:
        Frozen settings value

    Raises:
        ConfigurationError: A value cannot be parsed or is out of range
    """
    if yaml_config is None:
        yaml_config = load_yaml_config()

    values: dict[str, Any] = {}

    # YAML layer
    if "backend_url" in yaml_config:
        values["backend_url"] = str(yaml_config["backend_url"])
    if "host" in yaml_config:
        values["host"] = str(yaml_config["host"])
    if "port" in yaml_config:
        values["port"] = _parse_number("port", yaml_config["port"], int)
    if "debug" in yaml_config:
        values["debug"] = _parse_bool(yaml_config["debug"])

    timeouts = yaml_config.get("timeouts") or {}
    if "session_acquire" in timeouts:
        values["session_timeout"] = _parse_number("timeouts.session_acquire", timeouts["session_acquire"], float)
    if "rpc_call" in timeouts:
        values["rpc_timeout"] = _parse_number("timeouts.rpc_call", timeouts["rpc_call"], float)

    # Environment overrides
    if os.environ.get("ZEP_RELAY_BACKEND_URL"):
        values["backend_url"] = os.environ["ZEP_RELAY_BACKEND_URL"]
    if os.environ.get("ZEP_RELAY_HOST"):
        values["host"] = os.environ["ZEP_RELAY_HOST"]
    if os.environ.get("ZEP_RELAY_PORT"):
        values["port"] = _parse_number("ZEP_RELAY_PORT", os.environ["ZEP_RELAY_PORT"], int)
    if os.environ.get("ZEP_RELAY_SESSION_TIMEOUT"):
        values["session_timeout"] = _parse_number(
            "ZEP_RELAY_SESSION_TIMEOUT", os.environ["ZEP_RELAY_SESSION_TIMEOUT"], float
        )
    if os.environ.get("ZEP_RELAY_RPC_TIMEOUT"):
        values["rpc_timeout"] = _parse_number(
            "ZEP_RELAY_RPC_TIMEOUT", os.environ["ZEP_RELAY_RPC_TIMEOUT"], float
        )
    if os.environ.get("ZEP_RELAY_DEBUG"):
        values["debug"] = _parse_bool(os.environ["ZEP_RELAY_DEBUG"])

    return RelaySettings(**values)
