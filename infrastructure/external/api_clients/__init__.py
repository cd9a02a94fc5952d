"""
API客户端模块

提供 Files 服务 gateway 的客户端实现
"""
from .base import BaseAPIClient, APIResponse, HTTPMethod
from .exceptions import (
    APIError,
    InvalidArgumentError,
    AuthenticationError,
    PermissionDeniedError,
    NotFoundError,
    ConflictError,
    RateLimitError,
    ServerError,
)
from .factory import build_client, get_default_client, set_default_client, close_default_client
from .fetch import InitReq, fetch_req, fetch_content, render_url_search_params
from .files import FilesService, FilesWorkerService, FilesInternalService

__all__ = [
    "BaseAPIClient",
    "APIResponse",
    "HTTPMethod",
    "APIError",
    "InvalidArgumentError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "ServerError",
    "build_client",
    "get_default_client",
    "set_default_client",
    "close_default_client",
    "InitReq",
    "fetch_req",
    "fetch_content",
    "render_url_search_params",
    "FilesService",
    "FilesWorkerService",
    "FilesInternalService",
]
