import pytest

from python.watchjs.config import (
    DEFAULT_RECONNECT_INTERVAL,
    DEFAULT_SOCKET_URL,
    ClientConfig,
    normalize_socket_url,
)
from python.watchjs.errors import ConfigError


def test_defaults():
    config = ClientConfig()
    assert config.socket_url == DEFAULT_SOCKET_URL
    assert config.reconnect_interval == DEFAULT_RECONNECT_INTERVAL
    assert config.autostart is True


@pytest.mark.parametrize(
    "url, expected",
    [
        ("http://localhost:8080/~watchjs~", "ws://localhost:8080/~watchjs~"),
        ("https://example.test/watch", "wss://example.test/watch"),
        ("ws://localhost:1/", "ws://localhost:1/"),
    ],
)
def test_normalize_socket_url(url, expected):
    assert normalize_socket_url(url) == expected


def test_config_normalizes_url():
    assert ClientConfig(socket_url="https://dev.test/ws").socket_url == "wss://dev.test/ws"


def test_from_env_reads_values():
    config = ClientConfig.from_env(
        {
            "WATCHJS_URL": "http://127.0.0.1:9000/~watchjs~",
            "WATCHJS_RECONNECT_INTERVAL": "250",
            "WATCHJS_AUTOSTART": "false",
        }
    )
    assert config.socket_url == "ws://127.0.0.1:9000/~watchjs~"
    assert config.reconnect_interval == pytest.approx(0.25)
    assert config.autostart is False


def test_from_env_keeps_defaults_when_unset():
    config = ClientConfig.from_env({})
    assert config == ClientConfig()


@pytest.mark.parametrize("value", ["soon", "0", "-5"])
def test_from_env_rejects_bad_interval(value):
    with pytest.raises(ConfigError):
        ClientConfig.from_env({"WATCHJS_RECONNECT_INTERVAL": value})


def test_from_env_rejects_bad_flag():
    with pytest.raises(ConfigError):
        ClientConfig.from_env({"WATCHJS_AUTOSTART": "maybe"})


def test_non_positive_interval_rejected():
    with pytest.raises(ValueError):
        ClientConfig(reconnect_interval=0)
