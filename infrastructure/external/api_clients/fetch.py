"""
Request helpers shared by the generated-style service facades.

``render_url_search_params`` turns a request message into a query string and
``fetch_req`` sends a rendered path through a ``BaseAPIClient``, returning the
decoded response message.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping, Optional, Type, TypeVar, Union

import httpx

from application.dto import MessageBase
from core.logging_config import get_logger
from shared.codes import FieldNaming
from .base import APIResponse, BaseAPIClient, HTTPMethod
from .exceptions import APIError
from .factory import get_default_client

logger = get_logger(__name__)

M = TypeVar("M", bound=MessageBase)

RequestPayload = Union[MessageBase, Mapping[str, Any]]


@dataclass(frozen=True)
class InitReq:
    """Per-call options forwarded to the transport unchanged."""

    path_prefix: Optional[str] = None
    headers: dict[str, str] = field(default_factory=dict)
    timeout: Optional[float] = None
    field_naming: Optional[FieldNaming] = None
    client: Optional[BaseAPIClient] = None

    def with_headers(self, **headers: str) -> "InitReq":
        return replace(self, headers={**self.headers, **headers})


def resolve_client(init_req: Optional[InitReq]) -> BaseAPIClient:
    if init_req is not None and init_req.client is not None:
        return init_req.client
    return get_default_client()


def resolve_naming(init_req: Optional[InitReq]) -> FieldNaming:
    if init_req is not None and init_req.field_naming is not None:
        return FieldNaming(init_req.field_naming)
    return resolve_client(init_req).field_naming


def to_payload(req: RequestPayload, naming: FieldNaming = FieldNaming.PROTO) -> dict[str, Any]:
    if isinstance(req, MessageBase):
        return req.to_payload(naming)
    return dict(req)


def _is_primitive(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def _is_zero_value(value: Any) -> bool:
    return value is False or value == 0 or value == ""


def _flatten(payload: Mapping[str, Any], path: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in payload.items():
        new_path = f"{path}.{key}" if path else key
        if isinstance(value, Mapping):
            flat.update(_flatten(value, new_path))
        elif isinstance(value, (list, tuple)):
            if value and all(_is_primitive(v) for v in value):
                flat[new_path] = list(value)
        elif _is_primitive(value) and not _is_zero_value(value):
            flat[new_path] = value
    return flat


def _render_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render_url_search_params(
    req: RequestPayload,
    url_path_params: Iterable[str] = (),
    naming: FieldNaming = FieldNaming.PROTO,
) -> str:
    """Render the query string for ``req``, without the leading ``?``.

    Nested mappings flatten to dotted keys, lists of primitives repeat the
    key, zero values and keys bound into the URL path are left out.
    """
    excluded = set(url_path_params)
    pairs: list[tuple[str, str]] = []
    for key, value in _flatten(to_payload(req, naming)).items():
        if key in excluded:
            continue
        if isinstance(value, list):
            pairs.extend((key, _render_value(v)) for v in value)
        else:
            pairs.append((key, _render_value(value)))
    return str(httpx.QueryParams(pairs))


async def _send(
    path: str,
    init_req: Optional[InitReq],
    method: Union[str, HTTPMethod],
    body: Optional[RequestPayload],
    **kwargs: Any,
) -> APIResponse:
    client = resolve_client(init_req)
    init_req = init_req or InitReq()

    prefix = init_req.path_prefix if init_req.path_prefix is not None else client.path_prefix
    url = f"{prefix}{path}" if prefix else path

    if init_req.timeout is not None:
        kwargs.setdefault("timeout", init_req.timeout)
    json_data = None
    if body is not None:
        json_data = to_payload(body, resolve_naming(init_req))

    logger.debug("files_api.request", method=str(getattr(method, "value", method)), path=url)
    return await client.request(
        method,
        url,
        json_data=json_data,
        headers=init_req.headers or None,
        **kwargs,
    )


async def fetch_req(
    path: str,
    init_req: Optional[InitReq] = None,
    *,
    method: Union[str, HTTPMethod],
    body: Optional[RequestPayload] = None,
    response_model: Optional[Type[M]] = None,
    **kwargs: Any,
) -> Any:
    """Send ``path`` through the resolved client and decode the response.

    Returns an instance of ``response_model`` when given, the decoded JSON
    otherwise. Non-2xx responses raise the matching ``APIError`` subclass.
    Extra keyword arguments (``data``, ``files``) go to the client untouched.
    """
    response = await _send(path, init_req, method, body, **kwargs)
    try:
        data = response.json()
    except ValueError as exc:
        raise APIError(
            f"Invalid JSON response: {exc}",
            status_code=response.status_code,
            response=response,
            request_id=response.request_id,
        ) from exc
    if response_model is None:
        return data
    return response_model.model_validate(data or {})


async def fetch_content(
    path: str,
    init_req: Optional[InitReq] = None,
    *,
    method: Union[str, HTTPMethod] = HTTPMethod.GET,
) -> bytes:
    """Like ``fetch_req`` but returns the raw response body."""
    response = await _send(path, init_req, method, None)
    return response.raw_content


__all__ = [
    "InitReq",
    "fetch_req",
    "fetch_content",
    "render_url_search_params",
    "resolve_client",
    "resolve_naming",
    "to_payload",
]
