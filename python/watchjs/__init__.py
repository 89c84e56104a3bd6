"""
watchjs - live-reload client.

Keeps a websocket open to a watchjs development server and applies the
change batches it pushes to a live document:

    config.py      → endpoint, reconnect interval, autostart flag
    protocol.py    → message envelopes and change descriptors
    document.py    → the document model being patched
    assets.py      → path → asset element mapping and lookup
    changes.py     → per-change decisions (ignore / reload / inject)
    dispatch.py    → message routing by type tag
    connection.py  → connect, hello, reconnect, reload-on-reconnect
    client.py      → factory wiring everything together
"""

from .errors import ConfigError, ProtocolError, UnknownMessageType, WatchError  # noqa: F401
from .config import ClientConfig, normalize_socket_url  # noqa: F401
from .protocol import ChangeDescriptor, InboundMessage, decode_message, parse_change  # noqa: F401
from .document import AssetElement, Document  # noqa: F401
from .assets import AssetResolver, classify  # noqa: F401
from .changes import ChangeApplier  # noqa: F401
from .session import ClientSession  # noqa: F401
from .dispatch import MessageDispatcher  # noqa: F401
from .connection import ConnectionManager  # noqa: F401
from .client import WatchClient, autostart, create_client  # noqa: F401
from .cli import main  # noqa: F401

__all__ = [
    "WatchError",
    "ProtocolError",
    "UnknownMessageType",
    "ConfigError",
    "ClientConfig",
    "normalize_socket_url",
    "ChangeDescriptor",
    "InboundMessage",
    "decode_message",
    "parse_change",
    "AssetElement",
    "Document",
    "AssetResolver",
    "classify",
    "ChangeApplier",
    "ClientSession",
    "MessageDispatcher",
    "ConnectionManager",
    "WatchClient",
    "create_client",
    "autostart",
    "main",
]

__version__ = "0.1.0"
