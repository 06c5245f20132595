import asyncio
import logging
from functools import partial
from typing import Any, Dict, Optional

from aiomisc.counters import Statistic

from .builder import MessageBuilder
from .errors import JsonRpcError, RequestTimeoutError, ResponseError
from .ident import IdGeneratorOption
from .typehints import (
    Identifier, MessageType, Number, OnMessageType, ParamsType,
    PostMessageType,
)
from .utils import is_response


log = logging.getLogger(__name__)


class RequesterStatistic(Statistic):
    requests: int
    notifications: int
    success: int
    errors: int
    timeouts: int
    cancelled: int


class PendingRequest:
    """
    Completion handle of the single outstanding request. Only the
    first ``resolve``, ``reject`` or ``cancel`` call takes effect,
    the following ones return ``False``.
    """

    __slots__ = ("id", "future", "timer")

    def __init__(self, id: Identifier, future: asyncio.Future):
        self.id = id
        self.future = future
        self.timer: Optional[asyncio.TimerHandle] = None

    @property
    def done(self) -> bool:
        return self.future.done()

    def _settle(self) -> bool:
        if self.timer is not None:
            self.timer.cancel()
            self.timer = None
        return not self.future.done()

    def resolve(self, result: Any) -> bool:
        if not self._settle():
            return False
        self.future.set_result(result)
        return True

    def reject(self, exception: BaseException) -> bool:
        if not self._settle():
            return False
        self.future.set_exception(exception)
        return True

    def cancel(self) -> bool:
        self._settle()
        return self.future.cancel()

    def __repr__(self) -> str:
        return "<{}: id={!r} done={!r}>".format(
            self.__class__.__name__, self.id, self.done,
        )


class Requester:
    """
    Client side of the JSON-RPC channel. Sends requests through
    ``post_message`` and correlates responses received by the
    callback it registers with ``on_message``.

    .. code-block:: python

        requester = Requester(
            post_message=channel.send,
            on_message=channel.subscribe,
            id_generator=CounterIdGenerator,
            timeout=5,
        )
        result = await requester.request("sum", [1, 2, 3])

    :param post_message: sends a message object to the peer
    :param on_message: registers the inbound message callback,
                       called once during construction
    :param id_generator: ``IdGenerator`` instance or a
                         zero-argument constructor of one
    :param timeout: seconds to wait for each response, ``None`` or
                    zero waits forever
    :param timeout_message: message of the ``RequestTimeoutError``
    :param statistic_name: name of the ``RequesterStatistic``
    """

    __slots__ = (
        "_builder",
        "_pending",
        "_post_message",
        "_statistic",
        "_timeout",
        "_timeout_message",
    )

    DEFAULT_TIMEOUT_MESSAGE = "Timeout"

    def __init__(
        self,
        post_message: PostMessageType,
        on_message: OnMessageType,
        *,
        id_generator: IdGeneratorOption = None,
        timeout: Optional[Number] = None,
        timeout_message: Optional[str] = None,
        statistic_name: Optional[str] = None,
    ):
        if timeout is not None and timeout < 0:
            raise ValueError("Timeout must not be negative")

        self._builder = MessageBuilder(id_generator)
        self._post_message = post_message
        self._timeout = timeout
        self._timeout_message = (
            timeout_message or self.DEFAULT_TIMEOUT_MESSAGE
        )
        self._pending: Dict[Identifier, PendingRequest] = {}
        self._statistic = RequesterStatistic(statistic_name)

        on_message(self._on_message)

    @property
    def builder(self) -> MessageBuilder:
        return self._builder

    @property
    def timeout(self) -> Optional[Number]:
        return self._timeout

    @property
    def timeout_message(self) -> str:
        return self._timeout_message

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def _forget(self, pending: PendingRequest) -> bool:
        if self._pending.get(pending.id) is not pending:
            return False
        del self._pending[pending.id]
        return True

    def _on_done(
        self, pending: PendingRequest, future: asyncio.Future,
    ) -> None:
        # The caller might cancel the future directly
        if self._forget(pending) and future.cancelled():
            self._statistic.cancelled += 1
        pending._settle()

    def _on_timeout(self, pending: PendingRequest) -> None:
        self._forget(pending)

        log.debug(
            "Request %r timed out after %s seconds",
            pending.id, self._timeout,
        )

        if pending.reject(
            RequestTimeoutError(self._timeout, self._timeout_message),
        ):
            self._statistic.timeouts += 1

    def _on_message(self, message: Any) -> None:
        if not is_response(message):
            return

        request_id = message.get("id")

        # True == 1 and 1.0 == 1 for dict lookups
        if (
            isinstance(request_id, bool) or
            not isinstance(request_id, (str, int))
        ):
            return

        pending = self._pending.pop(request_id, None)

        if pending is None:
            return

        error = message.get("error")
        if error is not None:
            if pending.reject(ResponseError.from_error(error)):
                self._statistic.errors += 1
            return

        if pending.resolve(message.get("result")):
            self._statistic.success += 1

    def request(
        self, method: str, params: Optional[ParamsType] = None,
    ) -> "asyncio.Future[Any]":
        """
        Sends the request and returns the future of its result.

        The request is posted before this method returns, so the
        response may be delivered before the future is awaited.
        The future fails with ``ResponseError`` when the peer
        responds with an error and with ``RequestTimeoutError``
        when ``timeout`` expires first. A request whose identifier
        is already pending fails with ``JsonRpcError`` without being
        sent.
        """
        loop = asyncio.get_running_loop()
        payload = self._builder.create_request(method, params)

        pending = PendingRequest(payload["id"], loop.create_future())

        if pending.id in self._pending:
            pending.reject(
                JsonRpcError(
                    "Request {!r} is already pending".format(pending.id),
                ),
            )
            return pending.future

        self._pending[pending.id] = pending
        pending.future.add_done_callback(partial(self._on_done, pending))
        self._statistic.requests += 1

        try:
            self._post_message(payload)
        except Exception as e:
            self._forget(pending)
            pending.reject(e)
            return pending.future

        if self._timeout and not pending.done:
            pending.timer = loop.call_later(
                self._timeout, self._on_timeout, pending,
            )

        return pending.future

    def notify(
        self, method: str, params: Optional[ParamsType] = None,
    ) -> MessageType:
        payload = self._builder.create_request(
            method, params, notification=True,
        )
        self._post_message(payload)
        self._statistic.notifications += 1
        return payload

    def close(self) -> None:
        """ Cancels all outstanding requests """
        pending, self._pending = self._pending, {}

        if pending:
            log.debug("Cancelling %d pending requests", len(pending))

        for item in pending.values():
            if item.cancel():
                self._statistic.cancelled += 1


__all__ = (
    "PendingRequest",
    "Requester",
    "RequesterStatistic",
)
