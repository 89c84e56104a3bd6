import asyncio

from python.tests.socket_stubs import FakeConnector, FakeSocket
from python.watchjs.client import autostart, create_client
from python.watchjs.config import ClientConfig
from python.watchjs.document import Document


def test_create_client_wires_shared_document():
    document = Document()
    client = create_client(ClientConfig(), document)
    assert client.resolver.document is document
    assert client.applier.document is document
    assert client.dispatcher.applier is client.applier
    assert client.connection.dispatcher is client.dispatcher
    assert client.session.received_count == 0
    assert client.state == "idle"


def test_clients_do_not_share_sessions():
    first = create_client()
    second = create_client()
    assert first.session is not second.session
    assert first.document is not second.document


def test_autostart_disabled_returns_none():
    connector = FakeConnector()

    async def scenario():
        return await autostart(ClientConfig(autostart=False), connector=connector)

    assert asyncio.run(scenario()) is None
    assert connector.urls == []


def test_autostart_connects():
    async def scenario():
        socket = FakeSocket()
        connector = FakeConnector(socket)
        client = await autostart(ClientConfig(socket_url="ws://dev.test/"), connector=connector)
        assert client is not None
        assert client.session.socket is socket
        assert connector.urls == ["ws://dev.test/"]
        await client.close()

    asyncio.run(scenario())
