import json

import pytest

from python.watchjs.errors import ProtocolError
from python.watchjs.protocol import (
    ChangeDescriptor,
    decode_message,
    encode_hello,
    parse_change,
    parse_changes,
)


def test_encode_hello():
    assert json.loads(encode_hello()) == {"type": "hello"}


def test_decode_changes_message():
    raw = json.dumps(
        {
            "type": "changes",
            "data": [{"path": "/static/app.css", "kind": "modify", "action": "inject"}],
        }
    )
    message = decode_message(raw)
    assert message.type == "changes"
    assert message.data[0]["path"] == "/static/app.css"


def test_decode_accepts_bytes():
    assert decode_message(b'{"type": "hello"}').type == "hello"


@pytest.mark.parametrize("raw", ["not json", "[1, 2]", '{"data": []}', '{"type": 3}'])
def test_decode_rejects_malformed(raw):
    with pytest.raises(ProtocolError):
        decode_message(raw)


def test_parse_change_keeps_optional_fields():
    change = parse_change(
        {
            "path": "/js/app.js",
            "kind": "create",
            "action": "inject",
            "modified": "2024-03-01T10:00:00Z",
            "package": "app",
            "depends": ["ui", "net"],
        }
    )
    assert change == ChangeDescriptor(
        path="/js/app.js",
        kind="create",
        action="inject",
        modified="2024-03-01T10:00:00Z",
        package="app",
        depends=["ui", "net"],
    )


def test_parse_change_keeps_unknown_action_verbatim():
    change = parse_change({"path": "x.css", "kind": "modify", "action": "patch"})
    assert change.action == "patch"


def test_parse_changes_null_is_empty_batch():
    assert parse_changes(None) == []


def test_parse_changes_rejects_non_list():
    with pytest.raises(ProtocolError):
        parse_changes({"path": "x.css"})


def test_parse_change_requires_path():
    with pytest.raises(ProtocolError):
        parse_change({"kind": "create", "action": "inject"})
