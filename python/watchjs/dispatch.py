"""Routes decoded inbound messages to their handlers."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from .changes import ChangeApplier
from .errors import UnknownMessageType
from .protocol import MESSAGE_CHANGES, MESSAGE_HELLO, decode_message, parse_changes
from .session import ClientSession


logger = logging.getLogger(__name__)

MessageHandler = Callable[[Any], None]


class MessageDispatcher:
    """Decode messages and dispatch them by type tag."""

    def __init__(self, applier: ChangeApplier) -> None:
        self.applier = applier
        self._handlers: Dict[str, MessageHandler] = {
            MESSAGE_HELLO: self.on_hello,
            MESSAGE_CHANGES: self.on_changes,
        }

    @property
    def message_types(self) -> frozenset:
        return frozenset(self._handlers)

    def on_message(self, session: ClientSession, raw: Any) -> None:
        session.received_count += 1
        # The first message of a session is dropped, whatever its type.
        if session.received_count <= 1:
            logger.debug("dropping initial message")
            return
        message = decode_message(raw)
        handler = self._handlers.get(message.type)
        if handler is None:
            raise UnknownMessageType(message.type)
        handler(message.data)

    def on_hello(self, data: Any) -> None:
        logger.debug("server says hello")

    def on_changes(self, data: Any) -> None:
        self.applier.apply(parse_changes(data))
