"""API client exceptions."""
from __future__ import annotations

from typing import Any, Optional, TYPE_CHECKING

from shared.codes import GATEWAY_CODE_TO_HTTP_STATUS, GatewayCode

if TYPE_CHECKING:
    from .base import APIResponse


class APIError(Exception):
    """API错误基类

    ``body`` holds the decoded error payload exactly as the gateway sent it,
    ``code`` the gRPC status code found in it (if any).
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional["APIResponse"] = None,
        request_id: Optional[str] = None,
        code: Optional[GatewayCode] = None,
        body: Any = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response = response
        self.request_id = request_id
        self.code = code
        self.body = body
        super().__init__(self.message)

    def __str__(self):
        parts = [self.message]
        if self.status_code:
            parts.append(f"Status: {self.status_code}")
        if self.code is not None:
            parts.append(f"Code: {self.code.name}")
        if self.request_id:
            parts.append(f"Request ID: {self.request_id}")
        return " | ".join(parts)


class InvalidArgumentError(APIError):
    """请求参数错误"""
    pass


class AuthenticationError(APIError):
    """认证错误"""
    pass


class PermissionDeniedError(APIError):
    """权限错误"""
    pass


class NotFoundError(APIError):
    """资源未找到错误"""
    pass


class ConflictError(APIError):
    """资源冲突错误"""
    pass


class RateLimitError(APIError):
    """速率限制错误"""
    pass


class ServerError(APIError):
    """服务器错误"""
    pass


class RetryableAPIError(APIError):
    """可重试的API错误"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int],
        response: Optional["APIResponse"],
        retry_after: Optional[float] = None,
    ):
        super().__init__(
            message=message,
            status_code=status_code,
            response=response,
            request_id=response.request_id if response else None,
        )
        self.retry_after = retry_after


GATEWAY_CODE_ERRORS: dict[GatewayCode, type[APIError]] = {
    GatewayCode.INVALID_ARGUMENT: InvalidArgumentError,
    GatewayCode.FAILED_PRECONDITION: InvalidArgumentError,
    GatewayCode.OUT_OF_RANGE: InvalidArgumentError,
    GatewayCode.UNAUTHENTICATED: AuthenticationError,
    GatewayCode.PERMISSION_DENIED: PermissionDeniedError,
    GatewayCode.NOT_FOUND: NotFoundError,
    GatewayCode.ALREADY_EXISTS: ConflictError,
    GatewayCode.ABORTED: ConflictError,
    GatewayCode.RESOURCE_EXHAUSTED: RateLimitError,
    GatewayCode.UNKNOWN: ServerError,
    GatewayCode.INTERNAL: ServerError,
    GatewayCode.UNAVAILABLE: ServerError,
    GatewayCode.DATA_LOSS: ServerError,
    GatewayCode.UNIMPLEMENTED: ServerError,
    GatewayCode.DEADLINE_EXCEEDED: ServerError,
}

# Bodies without a usable code fall back to the status grpc-gateway pairs with it
HTTP_STATUS_ERRORS: dict[int, type[APIError]] = {
    GATEWAY_CODE_TO_HTTP_STATUS[code]: cls for code, cls in GATEWAY_CODE_ERRORS.items()
}


def error_class_for(status_code: int, code: Optional[GatewayCode] = None) -> type[APIError]:
    """Pick the exception class: gateway code first, HTTP status second."""
    if code is not None and code in GATEWAY_CODE_ERRORS:
        return GATEWAY_CODE_ERRORS[code]
    if status_code in HTTP_STATUS_ERRORS:
        return HTTP_STATUS_ERRORS[status_code]
    if status_code >= 500:
        return ServerError
    return APIError


__all__ = [
    "APIError",
    "InvalidArgumentError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "ServerError",
    "RetryableAPIError",
    "error_class_for",
]
