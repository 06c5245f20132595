from typing import (
    Any, Awaitable, Callable, Dict, List, Mapping, Union,
)


Number = Union[int, float]

Identifier = Union[str, int]
JsonRpcId = Union[Identifier, None]
ParamsType = Union[List[Any], Dict[str, Any]]
MessageType = Dict[str, Any]

MethodHandler = Callable[[Any], Union[Any, Awaitable[Any]]]
MethodRegistry = Mapping[str, MethodHandler]

PostMessageType = Callable[[MessageType], Any]
MessageCallbackType = Callable[[Any], None]
OnMessageType = Callable[[MessageCallbackType], Any]
