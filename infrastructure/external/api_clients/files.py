"""
Files service facades for the ``llmariner.files.server.v1`` gateway.

Each static method maps 1:1 onto an RPC: it renders the HTTP path (and the
query string or JSON body) and hands the call to ``fetch_req``.
"""
from __future__ import annotations

from typing import BinaryIO, Optional, Union
from urllib.parse import quote

from application.dto import (
    CreateFileFromObjectPathRequest,
    DeleteFileRequest,
    DeleteFileResponse,
    File,
    GetFilePathRequest,
    GetFilePathResponse,
    GetFileRequest,
    ListFilesRequest,
    ListFilesResponse,
)
from .base import HTTPMethod
from .fetch import InitReq, fetch_content, fetch_req, render_url_search_params, resolve_naming

PACKAGE = "llmariner.files.server.v1"


def path_param(value: Optional[str]) -> str:
    """Encode a path-bound field as a single URL segment."""
    return quote("" if value is None else str(value), safe="")


class FilesService:
    @staticmethod
    async def list_files(req: ListFilesRequest, init_req: Optional[InitReq] = None) -> ListFilesResponse:
        query = render_url_search_params(req, [], resolve_naming(init_req))
        return await fetch_req(
            f"/v1/files?{query}",
            init_req,
            method=HTTPMethod.GET,
            response_model=ListFilesResponse,
        )

    @staticmethod
    async def get_file(req: GetFileRequest, init_req: Optional[InitReq] = None) -> File:
        query = render_url_search_params(req, ["id"], resolve_naming(init_req))
        return await fetch_req(
            f"/v1/files/{path_param(req.id)}?{query}",
            init_req,
            method=HTTPMethod.GET,
            response_model=File,
        )

    @staticmethod
    async def delete_file(req: DeleteFileRequest, init_req: Optional[InitReq] = None) -> DeleteFileResponse:
        return await fetch_req(
            f"/v1/files/{path_param(req.id)}",
            init_req,
            method=HTTPMethod.DELETE,
            response_model=DeleteFileResponse,
        )

    @staticmethod
    async def create_file_from_object_path(
        req: CreateFileFromObjectPathRequest,
        init_req: Optional[InitReq] = None,
    ) -> File:
        return await fetch_req(
            "/v1/files:createFromObjectPath",
            init_req,
            method=HTTPMethod.POST,
            body=req,
            response_model=File,
        )

    @staticmethod
    async def create_file(
        file: Union[bytes, BinaryIO],
        filename: str,
        purpose: str,
        init_req: Optional[InitReq] = None,
        content_type: str = "application/octet-stream",
    ) -> File:
        """Upload ``file`` as multipart form data (``purpose`` + ``file`` parts).

        Served by a custom gateway handler rather than a generated RPC route.
        """
        return await fetch_req(
            "/v1/files",
            init_req,
            method=HTTPMethod.POST,
            response_model=File,
            data={"purpose": purpose},
            files={"file": (filename, file, content_type)},
        )

    @staticmethod
    async def get_file_content(req: GetFileRequest, init_req: Optional[InitReq] = None) -> bytes:
        return await fetch_content(
            f"/v1/files/{path_param(req.id)}/content",
            init_req,
            method=HTTPMethod.GET,
        )


class FilesWorkerService:
    @staticmethod
    async def get_file_path(req: GetFilePathRequest, init_req: Optional[InitReq] = None) -> GetFilePathResponse:
        return await fetch_req(
            f"/{PACKAGE}.FilesWorkerService/GetFilePath",
            init_req,
            method=HTTPMethod.POST,
            body=req,
            response_model=GetFilePathResponse,
        )


class FilesInternalService:
    @staticmethod
    async def get_file_path(req: GetFilePathRequest, init_req: Optional[InitReq] = None) -> GetFilePathResponse:
        return await fetch_req(
            f"/{PACKAGE}.FilesInternalService/GetFilePath",
            init_req,
            method=HTTPMethod.POST,
            body=req,
            response_model=GetFilePathResponse,
        )


__all__ = ["FilesService", "FilesWorkerService", "FilesInternalService", "path_param"]
