from .builder import (
    MessageBuilder, create_error_response, create_request,
    create_standard_error_response, create_success_response,
)
from .constants import JSONRPC_VERSION, ErrorCode
from .errors import JsonRpcError, RequestTimeoutError, ResponseError
from .ident import (
    CounterIdGenerator, IdGenerator, TimestampIdGenerator,
    TimestampWithRandomIdGenerator, UuidV4IdGenerator, get_id_generator,
)
from .requester import PendingRequest, Requester, RequesterStatistic
from .responder import Responder, ResponderStatistic
from .utils import is_notification, is_request, is_response
from .version import version_info


__version__ = "{}.{}.{}".format(*version_info)


__all__ = (
    "CounterIdGenerator",
    "ErrorCode",
    "IdGenerator",
    "JSONRPC_VERSION",
    "JsonRpcError",
    "MessageBuilder",
    "PendingRequest",
    "RequestTimeoutError",
    "Requester",
    "RequesterStatistic",
    "Responder",
    "ResponderStatistic",
    "ResponseError",
    "TimestampIdGenerator",
    "TimestampWithRandomIdGenerator",
    "UuidV4IdGenerator",
    "create_error_response",
    "create_request",
    "create_standard_error_response",
    "create_success_response",
    "get_id_generator",
    "is_notification",
    "is_request",
    "is_response",
    "version_info",
)
