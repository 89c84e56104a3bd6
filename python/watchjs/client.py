"""Factory that wires a watchjs client together."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .assets import AssetResolver
from .changes import ChangeApplier
from .config import ClientConfig
from .connection import ConnectionManager, Connector
from .dispatch import MessageDispatcher
from .document import Document
from .session import ClientSession


logger = logging.getLogger(__name__)


@dataclass
class WatchClient:
    config: ClientConfig
    document: Document
    resolver: AssetResolver
    applier: ChangeApplier
    dispatcher: MessageDispatcher
    connection: ConnectionManager

    @property
    def session(self) -> ClientSession:
        return self.connection.session

    @property
    def state(self) -> str:
        return self.connection.state

    async def start(self, host: Optional[str] = None) -> ClientSession:
        return await self.connection.connect(host)

    async def close(self) -> None:
        await self.connection.close()


def create_client(
    config: Optional[ClientConfig] = None,
    document: Optional[Document] = None,
    *,
    connector: Optional[Connector] = None,
    resolver: Optional[AssetResolver] = None,
) -> WatchClient:
    """Build an unconnected client; call ``start()`` to open the channel."""

    config = config or ClientConfig()
    document = document if document is not None else Document()
    resolver = resolver or AssetResolver(document)
    applier = ChangeApplier(document, resolver)
    dispatcher = MessageDispatcher(applier)
    connection = ConnectionManager(config, dispatcher, document, connector=connector)
    return WatchClient(
        config=config,
        document=document,
        resolver=resolver,
        applier=applier,
        dispatcher=dispatcher,
        connection=connection,
    )


async def autostart(
    config: Optional[ClientConfig] = None,
    document: Optional[Document] = None,
    *,
    connector: Optional[Connector] = None,
) -> Optional[WatchClient]:
    """Create and start a client when ``config.autostart`` is set."""

    config = config or ClientConfig.from_env()
    if not config.autostart:
        logger.debug("watchjs autostart disabled")
        return None
    client = create_client(config, document, connector=connector)
    await client.start()
    return client
