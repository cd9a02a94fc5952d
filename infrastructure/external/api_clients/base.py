"""
REST API客户端基类

提供通用的HTTP请求功能，包括：
- 自动重试
- 错误处理（解析 gateway 错误体）
- 请求/响应日志
- 认证支持
- 超时控制
"""
import asyncio
import json
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass
from enum import Enum
import httpx
from pydantic import BaseModel
import logging
from datetime import datetime

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    before_sleep_log,
)

from shared.codes import FieldNaming, GatewayCode
from .exceptions import APIError, RetryableAPIError, error_class_for

logger = logging.getLogger(__name__)


class HTTPMethod(Enum):
    """HTTP方法枚举"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


@dataclass
class APIResponse:
    """API响应封装"""
    status_code: int
    headers: Dict[str, str]
    data: Any
    raw_content: bytes
    elapsed_ms: float
    request_id: Optional[str] = None

    @property
    def is_error(self) -> bool:
        """判断请求是否失败"""
        return self.status_code >= 400

    def json(self) -> Any:
        """获取JSON响应"""
        if self.data is not None:
            return self.data
        if not self.raw_content:
            return None
        return json.loads(self.raw_content)


RETRY_STATUS_CODES = {429, 500, 502, 503, 504}

# A retryable status on a POST may mean the RPC already ran
IDEMPOTENT_METHODS = {"GET", "HEAD", "OPTIONS", "PUT", "DELETE"}


class BaseAPIClient:
    """
    REST API客户端基类

    提供通用的HTTP请求功能，子类可以继承并实现具体的API调用
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        headers: Optional[Dict[str, str]] = None,
        auth_token: Optional[str] = None,
        verify_ssl: bool = True,
        debug: bool = False,
        path_prefix: str = "",
        field_naming: FieldNaming = FieldNaming.PROTO,
        user_agent: str = "files-gateway-client/1.0",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        初始化API客户端

        Args:
            base_url: API基础URL
            timeout: 请求超时时间（秒）
            max_retries: 最大重试次数
            retry_delay: 重试延迟（秒）
            headers: 默认请求头
            auth_token: 认证令牌
            verify_ssl: 是否验证SSL证书
            debug: 是否开启调试模式
            path_prefix: 默认路径前缀（InitReq 未指定时使用）
            field_naming: 请求体字段命名方式
            user_agent: User-Agent 请求头
            transport: 自定义 httpx transport（测试时注入 MockTransport）
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.verify_ssl = verify_ssl
        self.debug = debug
        self.path_prefix = path_prefix
        self.field_naming = FieldNaming(field_naming)
        self._transport = transport

        # 设置默认请求头
        self.default_headers = {
            "Accept": "application/json",
            "User-Agent": user_agent,
        }
        if headers:
            self.default_headers.update(headers)

        # 设置认证
        if auth_token:
            self.set_auth_token(auth_token)

        # 创建HTTP客户端
        self._client: Optional[httpx.AsyncClient] = None

    def set_auth_token(self, token: str, header_name: str = "Authorization", prefix: str = "Bearer"):
        """设置认证令牌"""
        self.default_headers[header_name] = f"{prefix} {token}" if prefix else token

    def remove_auth_token(self, header_name: str = "Authorization"):
        """移除认证令牌"""
        self.default_headers.pop(header_name, None)

    @property
    async def client(self) -> httpx.AsyncClient:
        """获取或创建HTTP客户端"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                verify=self.verify_ssl,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """关闭HTTP客户端"""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        """异步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """异步上下文管理器出口"""
        await self.close()

    def _build_url(self, endpoint: str) -> str:
        """构建完整URL"""
        endpoint = endpoint.lstrip('/')
        return f"{self.base_url}/{endpoint}"

    def _log_request(self, method: str, url: str, **kwargs):
        """记录请求日志"""
        if self.debug:
            logger.debug(
                f"API Request: {method} {url}",
                extra={
                    "method": method,
                    "url": url,
                    "params": kwargs.get("params"),
                    "json": kwargs.get("json"),
                    "headers": {k: v for k, v in kwargs.get("headers", {}).items()
                              if k.lower() != "authorization"}
                }
            )

    def _log_response(self, response: APIResponse):
        """记录响应日志"""
        if self.debug:
            logger.debug(
                f"API Response: {response.status_code}",
                extra={
                    "status_code": response.status_code,
                    "elapsed_ms": response.elapsed_ms,
                    "request_id": response.request_id,
                    "data": response.data if response.status_code < 400 else None
                }
            )

    def _handle_error_response(self, status_code: int, response: APIResponse):
        """处理错误响应

        gateway 错误体形如 {"code": 5, "message": "...", "details": []}，
        其中 code 为 gRPC 状态码；非 JSON 错误体按文本处理。
        """
        error_message = f"API request failed with status {status_code}"
        code: Optional[GatewayCode] = None
        body: Any = response.data

        if isinstance(body, dict):
            raw_code = body.get("code")
            if isinstance(raw_code, int):
                try:
                    code = GatewayCode(raw_code)
                except ValueError:
                    code = None
            error_message = (
                body.get("message") or
                body.get("error") or
                body.get("detail") or
                error_message
            )
        elif body is None and response.raw_content:
            text = response.raw_content.decode("utf-8", errors="replace").strip()
            if text:
                error_message = text
                body = text

        error_class = error_class_for(status_code, code)
        raise error_class(
            message=error_message,
            status_code=status_code,
            response=response,
            request_id=response.request_id,
            code=code,
            body=body,
        )

    async def _request(
        self,
        method: Union[str, HTTPMethod],
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Union[Dict[str, Any], BaseModel]] = None,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        files: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> APIResponse:
        """
        发送HTTP请求

        Args:
            method: HTTP方法
            endpoint: API端点
            params: 查询参数
            json_data: JSON数据
            data: 表单数据
            headers: 请求头
            files: 上传文件
            **kwargs: 其他httpx参数

        Returns:
            APIResponse: API响应

        Raises:
            APIError: API错误
        """
        # 处理方法
        if isinstance(method, HTTPMethod):
            method = method.value
        method = method.upper()

        # 构建URL
        url = self._build_url(endpoint)

        # 合并请求头
        request_headers = {**self.default_headers}
        if headers:
            request_headers.update(headers)

        # 处理JSON数据
        if isinstance(json_data, BaseModel):
            json_data = json_data.model_dump(mode="json", exclude_none=True)

        # 记录请求
        self._log_request(method, url, params=params, json=json_data, headers=request_headers)

        retry_on_status = method in IDEMPOTENT_METHODS

        # 发送请求
        async def _send_once() -> APIResponse:
            start_time = datetime.now()
            client = await self.client
            response = await client.request(
                method=method,
                url=url,
                params=params,
                json=json_data,
                data=data,
                headers=request_headers,
                files=files,
                **kwargs
            )

            elapsed = (datetime.now() - start_time).total_seconds() * 1000

            content_type = response.headers.get("content-type", "")
            response_data = None

            if "application/json" in content_type and response.content:
                try:
                    response_data = response.json()
                except json.JSONDecodeError:
                    response_data = None

            api_response = APIResponse(
                status_code=response.status_code,
                headers=dict(response.headers),
                data=response_data,
                raw_content=response.content,
                elapsed_ms=elapsed,
                request_id=response.headers.get("x-request-id")
            )

            self._log_response(api_response)

            if retry_on_status and api_response.status_code in RETRY_STATUS_CODES:
                retry_after: Optional[float] = None
                if api_response.status_code == 429:
                    retry_header = api_response.headers.get("retry-after")
                    try:
                        if retry_header:
                            retry_after = float(retry_header)
                    except (TypeError, ValueError):
                        retry_after = None

                raise RetryableAPIError(
                    message=f"Transient API error with status {api_response.status_code}",
                    status_code=api_response.status_code,
                    response=api_response,
                    retry_after=retry_after,
                )

            if api_response.is_error:
                self._handle_error_response(api_response.status_code, api_response)

            return api_response

        # POST 只在连接建立前失败时重试
        transport_errors = (
            (httpx.TimeoutException, httpx.NetworkError)
            if retry_on_status
            else (httpx.ConnectError, httpx.ConnectTimeout)
        )

        retrying = AsyncRetrying(
            reraise=True,
            stop=stop_after_attempt(self.max_retries + 1),
            wait=self._retry_wait,
            retry=retry_if_exception_type((*transport_errors, RetryableAPIError)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=self._sleep,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    return await _send_once()
        except RetryableAPIError as exc:
            if exc.response:
                self._handle_error_response(exc.status_code or exc.response.status_code, exc.response)
            raise APIError(exc.message) from exc
        except APIError:
            raise
        except httpx.TimeoutException as exc:
            raise APIError(f"Request timeout after {self.timeout}s") from exc
        except httpx.NetworkError as exc:
            raise APIError(f"Network error: {exc}") from exc
        except httpx.HTTPError as exc:
            logger.error(f"Unexpected error during API request: {exc}")
            raise APIError(f"Unexpected error: {exc}") from exc

    def _retry_wait(self, retry_state: RetryCallState) -> float:
        """指数退避；429 的 Retry-After 作为下限，整体不超过 retry_delay * 8"""
        cap = self.retry_delay * 8
        delay = wait_exponential(multiplier=self.retry_delay, min=self.retry_delay, max=cap)(retry_state)
        outcome = retry_state.outcome
        exc = outcome.exception() if outcome is not None and outcome.failed else None
        retry_after = getattr(exc, "retry_after", None)
        if retry_after:
            delay = max(delay, retry_after)
        return min(delay, cap)

    async def _sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)

    async def get(self, endpoint: str, **kwargs) -> APIResponse:
        """GET请求"""
        return await self._request(HTTPMethod.GET, endpoint, **kwargs)

    async def request(self, method: Union[str, HTTPMethod], endpoint: str, **kwargs) -> APIResponse:
        """按任意方法发送请求"""
        return await self._request(method, endpoint, **kwargs)
