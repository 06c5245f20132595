import pytest

from aiojsonrpc import (
    CounterIdGenerator, MessageBuilder, create_error_response,
    create_success_response, is_notification, is_request, is_response,
)


builder = MessageBuilder(CounterIdGenerator())


@pytest.mark.parametrize("message", [
    builder.create_request("method", {"a": 1}),
    builder.create_request("method"),
    builder.create_request("method", notification=True),
    {"jsonrpc": "2.0", "method": "no.id"},
    # Not a 2.0 message, accepted as is
    {"id": 1},
    {"foo": "bar"},
    {},
])
def test_is_request(message):
    assert is_request(message)


@pytest.mark.parametrize("message", [
    create_success_response(1, "result"),
    create_error_response(-1, "error", 1),
    {"jsonrpc": "2.0", "id": None},
    None,
    "string",
    42,
    ["jsonrpc", "2.0"],
])
def test_is_not_request(message):
    assert not is_request(message)


@pytest.mark.parametrize("message", [
    create_success_response(1),
    create_success_response("id", {"a": 1}),
    create_error_response(-32601, "method not found", 1),
    create_error_response(-32700, "parse error", None),
    {"jsonrpc": "2.0", "id": None},
    {"jsonrpc": "1.0", "id": 1},
    {},
])
def test_is_response(message):
    assert is_response(message)


@pytest.mark.parametrize("message", [
    builder.create_request("method", [1, 2]),
    {"jsonrpc": "2.0", "id": 1},
    {"jsonrpc": "2.0", "id": "abc"},
    None,
    b"bytes",
    3.14,
])
def test_is_not_response(message):
    assert not is_response(message)


def test_is_notification():
    assert is_notification(builder.create_request("m", notification=True))
    assert is_notification({"jsonrpc": "2.0", "method": "m"})
    assert not is_notification(builder.create_request("m"))
    assert not is_notification(create_success_response(None))
