"""Default Files API client built from settings."""
from typing import Optional

from core.config import FilesAPISettings, settings
from core.logging_config import get_logger
from .base import BaseAPIClient

logger = get_logger(__name__)

_instance: Optional[BaseAPIClient] = None


def build_client(config: Optional[FilesAPISettings] = None, **overrides) -> BaseAPIClient:
    """Create a client from the ``files_api`` settings group.

    Keyword overrides are passed to ``BaseAPIClient`` as-is, e.g. a
    ``transport`` for tests or a different ``auth_token``.
    """
    config = config or settings.files_api
    options = dict(
        base_url=config.base_url,
        timeout=config.timeout,
        max_retries=config.max_retries,
        retry_delay=config.retry_delay,
        auth_token=config.api_key,
        verify_ssl=config.verify_ssl,
        debug=settings.DEBUG,
        path_prefix=config.path_prefix,
        field_naming=config.field_naming,
        user_agent=config.user_agent,
    )
    options.update(overrides)
    return BaseAPIClient(**options)


def get_default_client() -> BaseAPIClient:
    """Get or create the process-wide client.

    The first call builds the client from settings; later calls return the
    same instance until ``close_default_client`` or ``set_default_client``.
    """
    global _instance

    if _instance is None:
        _instance = build_client()
        logger.info("Created default Files API client", base_url=_instance.base_url)
    return _instance


def set_default_client(client: Optional[BaseAPIClient]) -> None:
    """Replace the default client (without closing the previous one)."""
    global _instance
    _instance = client


async def close_default_client() -> None:
    """Close and drop the default client.

    Call this at shutdown to release the underlying connection pool.
    """
    global _instance
    if _instance is not None:
        await _instance.close()
        _instance = None


__all__ = ["build_client", "get_default_client", "set_default_client", "close_default_client"]
