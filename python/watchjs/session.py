"""Per-connection client state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ClientSession:
    host: str
    reconnect_interval: float
    socket: Optional[Any] = None
    received_count: int = 0

    @property
    def connected(self) -> bool:
        return self.socket is not None
