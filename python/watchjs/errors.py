"""Exception types shared by the watchjs client."""

from __future__ import annotations


class WatchError(RuntimeError):
    """Base class for watchjs client failures."""


class ProtocolError(WatchError, ValueError):
    """Raised when an inbound message cannot be decoded."""


class UnknownMessageType(ProtocolError, LookupError):
    """Raised when no handler is registered for a message type."""

    def __init__(self, message_type: str) -> None:
        super().__init__(f"no handler for message type {message_type!r}")
        self.message_type = message_type


class ConfigError(WatchError, ValueError):
    """Raised for invalid client configuration values."""
