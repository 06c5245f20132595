from collections.abc import Mapping
from typing import Any

from .constants import ErrorCode
from .typehints import MessageType, Number


class JsonRpcError(Exception):
    pass


class ResponseError(JsonRpcError):
    """
    Error reported by the remote side. Method handlers may raise it
    as well, the responder turns ``code``, ``message`` and ``data``
    into the error object of the response.
    """

    def __init__(self, code: int, message: str, data: Any = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    @classmethod
    def from_error(cls, error: Any) -> "ResponseError":
        if not isinstance(error, Mapping):
            error = {"data": error}

        code = error.get("code")
        if not isinstance(code, int):
            code = ErrorCode.INTERNAL_ERROR

        return cls(
            code=int(code),
            message=str(
                error.get("message", ErrorCode.INTERNAL_ERROR.message),
            ),
            data=error.get("data"),
        )

    def to_error(self) -> MessageType:
        error: MessageType = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error

    def __repr__(self) -> str:
        return "<{}: {!r} ({})>".format(
            self.__class__.__name__, self.message, self.code,
        )


class RequestTimeoutError(JsonRpcError):
    """ No response arrived within ``timeout`` seconds """

    def __init__(self, timeout: Number, message: str):
        super().__init__(message)
        self.timeout = timeout
        self.message = message

    def __repr__(self) -> str:
        return "<{}: {!r} ({}s)>".format(
            self.__class__.__name__, self.message, self.timeout,
        )


__all__ = (
    "JsonRpcError",
    "RequestTimeoutError",
    "ResponseError",
)
