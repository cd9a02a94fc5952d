"""
配置文件 - 项目配置管理
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field, field_validator
from typing import Optional

from shared.codes import FieldNaming


def normalize_path_prefix(v: str) -> str:
    """Strip slashes and force a single leading one: api/ -> /api."""
    v = v.strip().rstrip("/")
    if v and not v.startswith("/"):
        v = "/" + v
    return v


class FilesAPISettings(BaseModel):
    # Gateway endpoint; path_prefix is prepended to every RPC path
    base_url: str = "http://localhost:8080"
    path_prefix: str = ""
    api_key: Optional[str] = None

    timeout: float = 30.0
    max_retries: int = Field(default=3, ge=0, le=10)
    retry_delay: float = Field(default=0.5, gt=0)
    verify_ssl: bool = True

    field_naming: FieldNaming = FieldNaming.PROTO
    user_agent: str = "files-gateway-client/1.0"

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("path_prefix")
    @classmethod
    def _normalize_path_prefix(cls, v: str) -> str:
        return normalize_path_prefix(v)


class Settings(BaseSettings):
    """项目配置"""

    # 基础配置
    PROJECT_NAME: str = "Files Gateway Client"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    files_api: FilesAPISettings = Field(default_factory=FilesAPISettings)

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        env_nested_delimiter="__",
    )


settings = Settings()
