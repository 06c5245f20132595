import asyncio
import inspect
import logging
from types import MappingProxyType
from typing import Any, Awaitable, Optional, Set

from aiomisc.counters import Statistic
from aiomisc.utils import cancel_tasks

from .builder import (
    create_error_response, create_standard_error_response,
    create_success_response,
)
from .constants import ErrorCode
from .typehints import (
    JsonRpcId, MessageType, MethodRegistry, OnMessageType,
    PostMessageType,
)
from .utils import is_request


log = logging.getLogger(__name__)


class ResponderStatistic(Statistic):
    requests: int
    notifications: int
    success: int
    errors: int
    not_found: int
    send_errors: int


def is_rpc_error(exc: BaseException) -> bool:
    return (
        isinstance(getattr(exc, "code", None), int) and
        isinstance(getattr(exc, "message", None), str)
    )


def error_response(request_id: JsonRpcId, exc: Exception) -> MessageType:
    if is_rpc_error(exc):
        return create_error_response(
            int(getattr(exc, "code")), getattr(exc, "message"), request_id,
            getattr(exc, "data", None),
        )

    return create_standard_error_response(
        ErrorCode.INTERNAL_ERROR, request_id,
    )


class Responder:
    """
    Server side of the JSON-RPC channel. Every request received by
    the callback registered with ``on_message`` is dispatched to the
    handler registered for its method, and exactly one response is
    sent back through ``post_message``.

    Handlers are called with the request ``params`` (``None`` when
    absent) and may return a value or an awaitable. Raise an
    exception having ``code`` and ``message`` attributes, e.g.
    ``ResponseError``, to reply with a custom error. Other exceptions
    are logged and reported as ``INTERNAL_ERROR``.

    Notifications are dispatched as well, but never answered.
    """

    __slots__ = (
        "_method_registry",
        "_post_message",
        "_statistic",
        "_tasks",
    )

    def __init__(
        self,
        post_message: PostMessageType,
        on_message: OnMessageType,
        *,
        method_registry: Optional[MethodRegistry] = None,
        statistic_name: Optional[str] = None,
    ):
        self._post_message = post_message
        self._method_registry: MethodRegistry = MappingProxyType(
            dict(method_registry or {}),
        )
        self._statistic = ResponderStatistic(statistic_name)
        self._tasks: Set[asyncio.Task] = set()

        on_message(self._on_message)

    @property
    def method_registry(self) -> MethodRegistry:
        return self._method_registry

    @method_registry.setter
    def method_registry(self, value: MethodRegistry) -> None:
        self._method_registry = MappingProxyType(dict(value))

    def _reply(self, request_id: JsonRpcId, response: MessageType) -> None:
        if request_id is None:
            return

        try:
            self._post_message(response)
        except Exception:
            self._statistic.send_errors += 1
            log.exception(
                "Failed to send response for request %r", request_id,
            )

    def _reply_error(self, request_id: JsonRpcId, exc: Exception) -> None:
        self._statistic.errors += 1

        if not is_rpc_error(exc):
            log.exception("Unhandled error in method handler:")

        self._reply(request_id, error_response(request_id, exc))

    async def _resolve(
        self, request_id: JsonRpcId, result: Awaitable[Any],
    ) -> None:
        try:
            value = await result
        except Exception as e:
            self._reply_error(request_id, e)
            return

        self._statistic.success += 1
        self._reply(request_id, create_success_response(request_id, value))

    def _create_task(self, coro: Awaitable[None]) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _on_message(self, message: Any) -> None:
        if not is_request(message):
            return

        request_id = message.get("id")
        method = message.get("method")

        if request_id is None:
            self._statistic.notifications += 1
        else:
            self._statistic.requests += 1

        handler = None
        if isinstance(method, str):
            handler = self._method_registry.get(method)

        if handler is None:
            self._statistic.not_found += 1
            self._reply(
                request_id,
                create_standard_error_response(
                    ErrorCode.METHOD_NOT_FOUND, request_id,
                ),
            )
            return

        try:
            result = handler(message.get("params"))
        except Exception as e:
            self._reply_error(request_id, e)
            return

        if inspect.isawaitable(result):
            self._create_task(self._resolve(request_id, result))
            return

        self._statistic.success += 1
        self._reply(request_id, create_success_response(request_id, result))

    async def close(self) -> None:
        """ Cancels handlers which are still running """
        if self._tasks:
            log.debug("Cancelling %d running handlers", len(self._tasks))
        await cancel_tasks(tuple(self._tasks))


__all__ = (
    "Responder",
    "ResponderStatistic",
    "error_response",
    "is_rpc_error",
)
