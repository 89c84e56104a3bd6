"""Wire protocol helpers: message envelopes and change descriptors."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .errors import ProtocolError


MESSAGE_HELLO = "hello"
MESSAGE_CHANGES = "changes"

KIND_CREATE = "create"
KIND_DELETE = "delete"
KIND_MODIFY = "modify"

ACTION_IGNORE = "ignore"
ACTION_RELOAD = "reload"
ACTION_INJECT = "inject"


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _ensure_str_list(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return []


@dataclass
class ChangeDescriptor:
    path: str
    kind: str = ""
    action: str = ""
    modified: Optional[str] = None
    package: Optional[str] = None
    depends: List[str] = field(default_factory=list)


@dataclass
class InboundMessage:
    type: str
    data: Any = None


def encode_hello() -> str:
    return json.dumps({"type": MESSAGE_HELLO})


def decode_message(raw: Any) -> InboundMessage:
    """Decode a raw text (or bytes) frame into an InboundMessage."""

    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ProtocolError("message is not valid utf-8") from exc
    try:
        payload = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ProtocolError(f"message is not valid json: {exc}") from exc
    if not isinstance(payload, dict):
        raise ProtocolError(f"message must be an object, got {type(payload).__name__}")
    message_type = payload.get("type")
    if not isinstance(message_type, str):
        raise ProtocolError(f"message missing type: {payload!r}")
    return InboundMessage(type=message_type, data=payload.get("data"))


def parse_change(entry: Any) -> ChangeDescriptor:
    """Convert one raw change dictionary into a ChangeDescriptor.

    ``kind`` and ``action`` are kept verbatim so that values outside the known
    sets still reach the applier.
    """

    if not isinstance(entry, dict):
        raise ProtocolError(f"change must be an object, got {type(entry).__name__}")
    path = entry.get("path")
    if not isinstance(path, str):
        raise ProtocolError(f"change missing path: {entry!r}")
    return ChangeDescriptor(
        path=path,
        kind=str(entry.get("kind") or ""),
        action=str(entry.get("action") or ""),
        modified=_optional_str(entry.get("modified")),
        package=_optional_str(entry.get("package")),
        depends=_ensure_str_list(entry.get("depends")),
    )


def parse_changes(data: Any) -> List[ChangeDescriptor]:
    if data is None:
        return []
    if not isinstance(data, (list, tuple)):
        raise ProtocolError(f"changes payload must be a list, got {type(data).__name__}")
    return [parse_change(entry) for entry in data]

