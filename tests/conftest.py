import asyncio
from typing import Any, Callable, List, Optional

import pytest


class Transport:
    """ In-memory side of a channel, captures outgoing messages """

    def __init__(self) -> None:
        self.sent: List[Any] = []
        self.callback: Optional[Callable[[Any], None]] = None
        self.peer: Optional["Transport"] = None

    def post_message(self, message: Any) -> None:
        self.sent.append(message)

        if self.peer is not None:
            loop = asyncio.get_running_loop()
            loop.call_soon(self.peer.deliver, message)

    def on_message(self, callback: Callable[[Any], None]) -> None:
        assert self.callback is None, "callback registered twice"
        self.callback = callback

    def deliver(self, message: Any) -> None:
        assert self.callback is not None
        self.callback(message)


@pytest.fixture
def transport() -> Transport:
    return Transport()


@pytest.fixture
def channel():
    client, server = Transport(), Transport()
    client.peer, server.peer = server, client
    return client, server
