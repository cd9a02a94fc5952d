"""Worker facade for servers still registered under the ``llmoperator`` package."""
from __future__ import annotations

from typing import Optional

from application.dto import GetFilePathRequest, GetFilePathResponse
from .base import HTTPMethod
from .fetch import InitReq, fetch_req

PACKAGE = "llmoperator.files.server.v1"


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


__all__ = ["FilesWorkerService"]
