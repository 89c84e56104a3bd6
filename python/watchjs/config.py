"""Client configuration resolved before the client starts."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigError


DEFAULT_SOCKET_URL = "ws://127.0.0.1:8080/~watchjs~"
DEFAULT_RECONNECT_INTERVAL = 1.0

ENV_URL = "WATCHJS_URL"
ENV_RECONNECT_INTERVAL = "WATCHJS_RECONNECT_INTERVAL"
ENV_AUTOSTART = "WATCHJS_AUTOSTART"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def normalize_socket_url(url: str) -> str:
    """Map an http(s) endpoint onto the matching websocket scheme."""
    if url.startswith("http://"):
        return "ws://" + url[len("http://"):]
    if url.startswith("https://"):
        return "wss://" + url[len("https://"):]
    return url


def parse_interval_ms(value: str) -> float:
    """Convert a millisecond string into seconds."""
    try:
        millis = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid reconnect interval: {value!r}") from exc
    if millis <= 0:
        raise ConfigError(f"reconnect interval must be positive: {value!r}")
    return millis / 1000.0


def parse_flag(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"invalid boolean flag: {value!r}")


@dataclass
class ClientConfig:
    socket_url: str = DEFAULT_SOCKET_URL
    reconnect_interval: float = DEFAULT_RECONNECT_INTERVAL
    autostart: bool = True

    def __post_init__(self) -> None:
        self.socket_url = normalize_socket_url(self.socket_url)
        if self.reconnect_interval <= 0:
            raise ConfigError(f"reconnect interval must be positive: {self.reconnect_interval!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """Build a config from ``WATCHJS_*`` variables, keeping defaults for unset ones."""

        env = os.environ if environ is None else environ
        socket_url = env.get(ENV_URL) or DEFAULT_SOCKET_URL
        interval = DEFAULT_RECONNECT_INTERVAL
        raw_interval = env.get(ENV_RECONNECT_INTERVAL)
        if raw_interval:
            interval = parse_interval_ms(raw_interval)
        autostart = True
        raw_autostart = env.get(ENV_AUTOSTART)
        if raw_autostart:
            autostart = parse_flag(raw_autostart)
        return cls(socket_url=socket_url, reconnect_interval=interval, autostart=autostart)
