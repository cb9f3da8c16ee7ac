"""Config loading utilities for the REST and streaming clients."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from openalgo.errors import ConfigError

DEFAULT_HOST = "http://127.0.0.1:5000"
DEFAULT_VERSION = "v1"
DEFAULT_WS_URL = "ws://127.0.0.1:8765"

ENV_KEYS = {
    "api_key": "OPENALGO_API_KEY",
    "host": "OPENALGO_HOST",
    "version": "OPENALGO_VERSION",
    "ws_url": "OPENALGO_WS_URL",
}


@dataclass(frozen=True)
class OpenAlgoConfig:
    """Connection settings shared read-only by every sub-client.

    Attributes:
        api_key: Opaque key sent with every REST call and the WebSocket auth frame.
        host: Base URL of the REST server, without a trailing slash.
        version: API version path segment.
        ws_url: WebSocket endpoint for streaming market data.
        timeout_seconds: Per-request HTTP timeout.
        command_capacity: Bound of the outbound subscription command channel.
        event_capacity: Bound of the inbound market-data event channel.
        open_timeout_seconds: Time allowed for the WebSocket opening handshake.
    """

    api_key: str
    host: str = DEFAULT_HOST
    version: str = DEFAULT_VERSION
    ws_url: str = DEFAULT_WS_URL
    timeout_seconds: float = 10.0
    command_capacity: int = 32
    event_capacity: int = 128
    open_timeout_seconds: float = 10.0

    def __post_init__(self) -> None:
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "host", self.host.rstrip("/"))
        if self.command_capacity < 1 or self.event_capacity < 1:
            raise ConfigError("channel capacities must be at least 1")


def _from_mapping(raw: Mapping[str, Any]) -> OpenAlgoConfig:
    section = raw.get("openalgo", raw)
    if not isinstance(section, Mapping):
        raise ConfigError("openalgo section must be a mapping")
    try:
        return OpenAlgoConfig(
            api_key=str(section.get("api_key", "")),
            host=section.get("host", DEFAULT_HOST),
            version=section.get("version", DEFAULT_VERSION),
            ws_url=section.get("ws_url", DEFAULT_WS_URL),
            timeout_seconds=float(section.get("timeout_seconds", 10.0)),
            command_capacity=int(section.get("command_capacity", 32)),
            event_capacity=int(section.get("event_capacity", 128)),
            open_timeout_seconds=float(section.get("open_timeout_seconds", 10.0)),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid openalgo config: {exc}") from exc


def load_config(path: str | Path) -> OpenAlgoConfig:
    """Load an :class:`OpenAlgoConfig` from a YAML file."""

    resolved = Path(path).expanduser().resolve()
    try:
        with resolved.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"cannot read config {resolved}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"cannot parse config {resolved}: {exc}") from exc

    if not isinstance(raw, Mapping):
        raise ConfigError(f"config {resolved} must contain a mapping")
    return _from_mapping(raw)


def config_from_env(defaults: Optional[OpenAlgoConfig] = None) -> OpenAlgoConfig:
    """Overlay ``OPENALGO_*`` environment variables on top of ``defaults``."""

    overrides: Dict[str, str] = {}
    for field_name, env_key in ENV_KEYS.items():
        value = os.getenv(env_key)
        if value:
            overrides[field_name] = value

    if defaults is None:
        return OpenAlgoConfig(**{"api_key": "", **overrides})
    return replace(defaults, **overrides)


__all__ = [
    "OpenAlgoConfig",
    "load_config",
    "config_from_env",
    "DEFAULT_HOST",
    "DEFAULT_VERSION",
    "DEFAULT_WS_URL",
]
