"""
数据传输对象（DTO）- Files 服务的请求/响应消息

Every message mirrors a proto message of ``llmariner.files.server.v1``.
Fields are optional; presence is not enforced here and is left to the server.
Attribute names follow the proto (snake_case) names, the camelCase JSON names
are accepted as aliases so payloads from either naming generation validate.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from shared.codes import FieldNaming


class MessageBase(BaseModel):
    """Base message: dual naming on input, explicit naming on output."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_payload(self, naming: FieldNaming = FieldNaming.PROTO) -> dict[str, Any]:
        """Render the wire representation, leaving out unset fields."""
        return self.model_dump(
            mode="json",
            by_alias=FieldNaming(naming) is FieldNaming.CAMEL,
            exclude_none=True,
        )


class File(MessageBase):
    id: Optional[str] = None
    # int64 fields travel as JSON strings in proto3 JSON; lax mode coerces them
    bytes: Optional[int] = None
    created_at: Optional[int] = None
    filename: Optional[str] = None
    object: Optional[str] = None
    purpose: Optional[str] = None

    @property
    def created_at_datetime(self) -> Optional[datetime]:
        """``created_at`` (unix seconds) as an aware UTC datetime."""
        if self.created_at is None:
            return None
        return datetime.fromtimestamp(self.created_at, tz=timezone.utc)


class ListFilesRequest(MessageBase):
    purpose: Optional[str] = None


class ListFilesResponse(MessageBase):
    object: Optional[str] = None
    data: Optional[List[File]] = None


class GetFileRequest(MessageBase):
    id: Optional[str] = None


class DeleteFileRequest(MessageBase):
    id: Optional[str] = None


class DeleteFileResponse(MessageBase):
    id: Optional[str] = None
    object: Optional[str] = None
    deleted: Optional[bool] = None


class CreateFileFromObjectPathRequest(MessageBase):
    object_path: Optional[str] = None
    purpose: Optional[str] = None


class GetFilePathRequest(MessageBase):
    id: Optional[str] = None


class GetFilePathResponse(MessageBase):
    path: Optional[str] = None
    filename: Optional[str] = None


__all__ = [
    "MessageBase",
    "File",
    "ListFilesRequest",
    "ListFilesResponse",
    "GetFileRequest",
    "DeleteFileRequest",
    "DeleteFileResponse",
    "CreateFileFromObjectPathRequest",
    "GetFilePathRequest",
    "GetFilePathResponse",
]
