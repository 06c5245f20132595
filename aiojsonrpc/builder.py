from typing import Any, Optional, Union

from .constants import JSONRPC_VERSION, ErrorCode
from .ident import IdGenerator, IdGeneratorOption, get_id_generator
from .typehints import JsonRpcId, MessageType, ParamsType


ErrorKindType = Union[str, ErrorCode]


def create_request(
    id: JsonRpcId, method: str, params: Optional[ParamsType] = None,
) -> MessageType:
    message: MessageType = {
        "jsonrpc": JSONRPC_VERSION,
        "id": id,
        "method": method,
    }
    if params is not None:
        message["params"] = params
    return message


def create_success_response(
    id: JsonRpcId, result: Any = None,
) -> MessageType:
    # "result" is required even when the method returns nothing
    return {"jsonrpc": JSONRPC_VERSION, "id": id, "result": result}


def create_error_response(
    code: int, message: str, id: JsonRpcId, data: Any = None,
) -> MessageType:
    error: MessageType = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": JSONRPC_VERSION, "id": id, "error": error}


def get_error_code(kind: ErrorKindType) -> ErrorCode:
    if isinstance(kind, ErrorCode):
        return kind

    try:
        return ErrorCode[kind]
    except (KeyError, TypeError) as e:
        raise ValueError("Unknown standard error %r" % (kind,)) from e


def create_standard_error_response(
    kind: ErrorKindType, id: JsonRpcId, data: Any = None,
) -> MessageType:
    """
    Error response for one of the reserved JSON-RPC error kinds.

    >>> create_standard_error_response("METHOD_NOT_FOUND", 1)["error"]
    {'code': -32601, 'message': 'method not found'}

    :param kind: ``ErrorCode`` member or its name
    :param id: identifier of the failed request
    :param data: optional additional information
    :raises ValueError: when ``kind`` is not a reserved error kind
    """
    code = get_error_code(kind)
    return create_error_response(int(code), code.message, id, data)


class MessageBuilder:
    """
    Protocol object factory. The only state is the identifier
    generator consumed by ``create_request``.
    """

    __slots__ = ("_id_generator",)

    create_success_response = staticmethod(create_success_response)
    create_error_response = staticmethod(create_error_response)
    create_standard_error_response = staticmethod(
        create_standard_error_response,
    )

    def __init__(self, id_generator: IdGeneratorOption = None):
        self._id_generator = get_id_generator(id_generator)

    @property
    def id_generator(self) -> IdGenerator:
        return self._id_generator

    def set_id_generator(self, id_generator: IdGeneratorOption) -> None:
        self._id_generator = get_id_generator(id_generator)

    def create_request(
        self, method: str, params: Optional[ParamsType] = None,
        notification: bool = False,
    ) -> MessageType:
        """
        :param notification: create a notification, the ``id`` is
                             ``None`` and no identifier is consumed
        """
        request_id = None if notification else self._id_generator.next()
        return create_request(request_id, method, params)


__all__ = (
    "ErrorKindType",
    "MessageBuilder",
    "create_error_response",
    "create_request",
    "create_standard_error_response",
    "create_success_response",
    "get_error_code",
)
