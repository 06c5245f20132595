from collections.abc import Mapping
from typing import Any

from .constants import JSONRPC_VERSION


def is_request(message: Any) -> bool:
    """
    Returns ``False`` for objects that are not mappings or that look
    like a JSON-RPC 2.0 response (an ``id`` without a ``method``).
    Anything else is accepted, ``method`` and ``params`` are not
    validated here.
    """
    if not isinstance(message, Mapping):
        return False

    if message.get("jsonrpc") == JSONRPC_VERSION and "id" in message:
        return "method" in message

    return True


def is_response(message: Any) -> bool:
    """
    Returns ``False`` for objects that are not mappings or that carry
    a JSON-RPC 2.0 ``id`` with neither ``result`` nor ``error``.
    """
    if not isinstance(message, Mapping):
        return False

    if (
        message.get("jsonrpc") == JSONRPC_VERSION and
        message.get("id") is not None
    ):
        return "result" in message or "error" in message

    return True


def is_notification(message: Any) -> bool:
    return is_request(message) and message.get("id") is None


__all__ = (
    "is_notification",
    "is_request",
    "is_response",
)
