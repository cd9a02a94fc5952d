"""
Shared codes used across layers (DTO/Core/Infrastructure).

The gateway reports failures with the gRPC status code of the backing RPC,
so this module keeps the canonical numbering in one place together with the
HTTP status the gateway pairs it with.
"""
from enum import Enum, IntEnum


class GatewayCode(IntEnum):
    """gRPC status codes as they appear in gateway error bodies."""

    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16


# Mirrors runtime.HTTPStatusFromCode in grpc-gateway
GATEWAY_CODE_TO_HTTP_STATUS: dict[GatewayCode, int] = {
    GatewayCode.OK: 200,
    GatewayCode.CANCELLED: 499,
    GatewayCode.UNKNOWN: 500,
    GatewayCode.INVALID_ARGUMENT: 400,
    GatewayCode.DEADLINE_EXCEEDED: 504,
    GatewayCode.NOT_FOUND: 404,
    GatewayCode.ALREADY_EXISTS: 409,
    GatewayCode.PERMISSION_DENIED: 403,
    GatewayCode.RESOURCE_EXHAUSTED: 429,
    GatewayCode.FAILED_PRECONDITION: 400,
    GatewayCode.ABORTED: 409,
    GatewayCode.OUT_OF_RANGE: 400,
    GatewayCode.UNIMPLEMENTED: 501,
    GatewayCode.INTERNAL: 500,
    GatewayCode.UNAVAILABLE: 503,
    GatewayCode.DATA_LOSS: 500,
    GatewayCode.UNAUTHENTICATED: 401,
}


class FieldNaming(str, Enum):
    """JSON field naming convention used on the wire.

    PROTO keeps the proto field names (``created_at``), which is what the
    gateway marshals with. CAMEL uses lowerCamelCase (``createdAt``), the
    protojson default and what older generated clients send.
    """

    PROTO = "proto"
    CAMEL = "camel"


class FilePurpose(str, Enum):
    """Purposes accepted by the files server."""

    FINE_TUNE = "fine-tune"
    ASSISTANTS = "assistants"


__all__ = ["GatewayCode", "GATEWAY_CODE_TO_HTTP_STATUS", "FieldNaming", "FilePurpose"]
