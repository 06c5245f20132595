import abc
import itertools
import uuid
from random import getrandbits, randrange
from time import time_ns
from typing import Callable, Iterator, Optional, Union

from .typehints import Identifier


class IdGenerator(abc.ABC):
    """
    Produces identifiers for outgoing requests.

    Uniqueness among outstanding requests of one requester is
    the responsibility of the concrete strategy. Subclass it and
    implement ``next`` to plug a custom strategy.
    """

    __slots__ = ()

    @abc.abstractmethod
    def next(self) -> Identifier:
        raise NotImplementedError

    def __iter__(self) -> Iterator[Identifier]:
        return self

    def __next__(self) -> Identifier:
        return self.next()


IdGeneratorOption = Optional[
    Union[IdGenerator, Callable[[], IdGenerator]]
]


def uuid4() -> str:
    """ UUID4 string, cryptographically strong when the OS allows it """
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        # os.urandom has no randomness source on this platform
        return str(uuid.UUID(int=getrandbits(128), version=4))


def time_ms() -> int:
    return time_ns() // 1000000


class CounterIdGenerator(IdGenerator):
    """
    Incrementing integers starting at zero. Fast, but unique only
    within one generator instance.
    """

    __slots__ = ("_counter",)

    def __init__(self, start: int = 0):
        self._counter = itertools.count(start)

    def next(self) -> int:
        return next(self._counter)


class UuidV4IdGenerator(IdGenerator):
    """ Canonical hyphenated UUID4 strings """

    __slots__ = ()

    def next(self) -> str:
        return uuid4()


class TimestampIdGenerator(IdGenerator):
    """
    Milliseconds since epoch. Easy to read in logs, but collides
    when two requests are sent within the same millisecond.
    """

    __slots__ = ()

    def next(self) -> int:
        return time_ms()


class TimestampWithRandomIdGenerator(IdGenerator):
    """ ``"<milliseconds>-<random 0..999999>"`` strings """

    __slots__ = ()

    def next(self) -> str:
        return "{}-{}".format(time_ms(), randrange(1000000))


DEFAULT_ID_GENERATOR = UuidV4IdGenerator


def get_id_generator(value: IdGeneratorOption = None) -> IdGenerator:
    """
    Normalize the ``id_generator`` option to a generator instance.

    :param value: ``None`` for the default UUID4 generator,
                  a ready made ``IdGenerator`` instance, or a
                  zero-argument constructor returning one
                  (e.g. ``CounterIdGenerator`` class itself)
    """
    if value is None:
        return DEFAULT_ID_GENERATOR()

    if isinstance(value, IdGenerator):
        return value

    if not callable(value):
        raise TypeError(
            "id_generator must be an IdGenerator or a "
            "zero-argument constructor, not %r" % (value,),
        )

    generator = value()

    if not isinstance(generator, IdGenerator):
        raise TypeError(
            "%r returned %r which is not an IdGenerator" % (
                value, generator,
            ),
        )

    return generator


__all__ = (
    "CounterIdGenerator",
    "DEFAULT_ID_GENERATOR",
    "IdGenerator",
    "IdGeneratorOption",
    "TimestampIdGenerator",
    "TimestampWithRandomIdGenerator",
    "UuidV4IdGenerator",
    "get_id_generator",
    "time_ms",
    "uuid4",
)
