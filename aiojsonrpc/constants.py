from enum import IntEnum, unique


JSONRPC_VERSION = "2.0"


@unique
class ErrorCode(IntEnum):
    """ Reserved error codes of the JSON-RPC 2.0 specification """

    # Invalid JSON was received
    PARSE_ERROR = -32700
    # The JSON sent is not a valid request object
    INVALID_REQUEST = -32600
    # The method does not exist or is not available
    METHOD_NOT_FOUND = -32601
    # Invalid method parameters
    INVALID_PARAMS = -32602
    # Internal JSON-RPC error
    INTERNAL_ERROR = -32603

    @property
    def message(self) -> str:
        return self.name.replace("_", " ").lower()
