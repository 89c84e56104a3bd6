"""Connection lifecycle for the watchjs client.

The manager walks ``idle -> connecting -> open -> closed``.  Entering
``closed`` starts a single reconnect task that retries at a fixed interval
forever.  A reconnect that succeeds does not resume live patching: the new
channel is closed, the document is reloaded and the manager parks in
``reloading``.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import replace
from typing import Any, Awaitable, Callable, List, Optional

import websockets
from websockets.exceptions import ConnectionClosed

from .config import ClientConfig
from .dispatch import MessageDispatcher
from .document import Document
from .protocol import encode_hello
from .session import ClientSession


logger = logging.getLogger(__name__)

Connector = Callable[[str], Awaitable[Any]]
StateCallback = Callable[[str], None]

STATE_IDLE = "idle"
STATE_CONNECTING = "connecting"
STATE_OPEN = "open"
STATE_CLOSED = "closed"
STATE_RELOADING = "reloading"
STATE_STOPPED = "stopped"


def websocket_connector(url: str) -> Awaitable[Any]:
    return websockets.connect(url)


class ConnectionManager:
    """Owns the transport connection and its reconnect policy."""

    def __init__(
        self,
        config: ClientConfig,
        dispatcher: MessageDispatcher,
        document: Document,
        *,
        connector: Optional[Connector] = None,
    ) -> None:
        self.config = config
        self.dispatcher = dispatcher
        self.document = document
        self.session = ClientSession(host=config.socket_url, reconnect_interval=config.reconnect_interval)
        self._connector: Connector = connector or websocket_connector
        self._state = STATE_IDLE
        self._shutdown = False
        self._reader_task: Optional[asyncio.Task] = None
        self._reconnect_task: Optional[asyncio.Task] = None
        self._on_open: List[StateCallback] = []
        self._on_close: List[StateCallback] = []
        self.reconnect_attempts = 0

    #
    # Connection lifecycle helpers
    #
    @property
    def state(self) -> str:
        return self._state

    @property
    def reconnecting(self) -> bool:
        return self._reconnect_task is not None and not self._reconnect_task.done()

    def register_on_open(self, callback: StateCallback) -> None:
        self._on_open.append(callback)

    def register_on_close(self, callback: StateCallback) -> None:
        self._on_close.append(callback)

    async def connect(self, host: Optional[str] = None) -> ClientSession:
        """Open the channel and greet the server.

        A failed connect is not raised: it moves the manager to ``closed``
        and the reconnect loop takes over.
        """

        if self._shutdown:
            raise RuntimeError("connection manager stopped")
        url = host or self.session.host
        self.session = ClientSession(host=url, reconnect_interval=self.session.reconnect_interval)
        self._set_state(STATE_CONNECTING)
        try:
            socket = await self._connector(url)
        except Exception as exc:
            logger.debug("watchjs error connecting to %s: %s", url, exc)
            self._handle_close(self.session)
            return self.session
        self.session = replace(self.session, socket=socket)
        session = self.session
        self._set_state(STATE_OPEN)
        try:
            await socket.send(encode_hello())
        except Exception as exc:
            logger.debug("watchjs hello failed: %s", exc)
            self._handle_close(session)
            return session
        self._reader_task = asyncio.create_task(self._reader_loop(session))
        return session

    async def close(self) -> None:
        self._shutdown = True
        current = asyncio.current_task()
        for task in (self._reconnect_task, self._reader_task):
            if task is None or task is current or task.done():
                continue
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._reconnect_task = None
        self._reader_task = None
        await self._close_socket(self.session.socket)
        self._set_state(STATE_STOPPED)

    #
    # Internal helpers
    #
    async def _reader_loop(self, session: ClientSession) -> None:
        try:
            async for raw in session.socket:
                try:
                    self.dispatcher.on_message(session, raw)
                except Exception:
                    # Message handlers should not disrupt transport.
                    logger.exception("watchjs failed to handle message")
        except ConnectionClosed as exc:
            logger.debug("watchjs close: %s", exc)
        except Exception as exc:
            logger.debug("watchjs error: %s", exc)
        else:
            logger.debug("watchjs close: channel ended")
        finally:
            self._handle_close(session)

    def _handle_close(self, session: ClientSession) -> None:
        if self._shutdown or session is not self.session:
            return
        if self._state in (STATE_CLOSED, STATE_RELOADING):
            return
        self._set_state(STATE_CLOSED)
        self._schedule_reconnect()

    def _schedule_reconnect(self) -> None:
        if self.reconnecting:
            return
        self._reconnect_task = asyncio.create_task(self._reconnect_loop())

    async def _reconnect_loop(self) -> None:
        url = self.session.host
        while not self._shutdown:
            await asyncio.sleep(self.session.reconnect_interval)
            self.reconnect_attempts += 1
            try:
                socket = await self._connector(url)
            except Exception as exc:
                logger.debug("watchjs tried to reconnect and failed: %s", exc)
                continue
            await self._handle_reconnected(socket)
            return

    async def _handle_reconnected(self, socket: Any) -> None:
        logger.info("watchjs reconnected to %s, reloading document", self.session.host)
        self.session = replace(self.session, socket=socket)
        self._set_state(STATE_RELOADING)
        # The reconnected channel is not read.
        await self._close_socket(socket)
        self.document.reload()

    async def _close_socket(self, socket: Any) -> None:
        if socket is None:
            return
        try:
            await socket.close()
        except Exception as exc:
            logger.debug("watchjs socket close failed: %s", exc)

    def _set_state(self, new_state: str) -> None:
        if self._state == new_state:
            return
        self._state = new_state
        callbacks: List[StateCallback]
        if new_state == STATE_OPEN:
            callbacks = list(self._on_open)
        elif new_state == STATE_CLOSED:
            callbacks = list(self._on_close)
        else:
            callbacks = []
        for callback in callbacks:
            try:
                callback(new_state)
            except Exception:
                logger.exception("state callback failed")
