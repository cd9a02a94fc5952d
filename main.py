"""
Files gateway 命令行入口

Usage:
    python main.py list [--purpose fine-tune]
    python main.py get FILE_ID
    python main.py delete FILE_ID
    python main.py create-from-path OBJECT_PATH --purpose fine-tune
    python main.py upload ./train.jsonl --purpose fine-tune
    python main.py content FILE_ID -o out.jsonl
    python main.py path FILE_ID [--internal | --legacy]
"""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional

from application.dto import (
    CreateFileFromObjectPathRequest,
    DeleteFileRequest,
    GetFilePathRequest,
    GetFileRequest,
    ListFilesRequest,
    MessageBase,
)
from core.config import normalize_path_prefix, settings
from core.logging_config import configure_logging, get_logger
from infrastructure.external.api_clients import (
    APIError,
    FilesInternalService,
    FilesService,
    FilesWorkerService,
    InitReq,
    close_default_client,
)
from infrastructure.external.api_clients import legacy
from shared.codes import FieldNaming, FilePurpose

logger = get_logger(__name__)

PURPOSES = [p.value for p in FilePurpose]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="files", description=settings.PROJECT_NAME)
    parser.add_argument("--base-url", help="gateway base URL (default: FILES_API__BASE_URL)")
    parser.add_argument("--path-prefix", default=None, help="path prefix prepended to every route")
    parser.add_argument(
        "--naming",
        choices=[n.value for n in FieldNaming],
        default=None,
        help="JSON field naming for request bodies",
    )
    parser.add_argument("--debug", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="list files")
    p.add_argument("--purpose", choices=PURPOSES)

    p = sub.add_parser("get", help="get a file")
    p.add_argument("id")

    p = sub.add_parser("delete", help="delete a file")
    p.add_argument("id")

    p = sub.add_parser("create-from-path", help="register an existing object as a file")
    p.add_argument("object_path")
    p.add_argument("--purpose", choices=PURPOSES, required=True)

    p = sub.add_parser("upload", help="upload a local file")
    p.add_argument("path", type=Path)
    p.add_argument("--purpose", choices=PURPOSES, required=True)

    p = sub.add_parser("content", help="download file content")
    p.add_argument("id")
    p.add_argument("-o", "--output", type=Path)

    p = sub.add_parser("path", help="resolve the object store path of a file")
    p.add_argument("id")
    group = p.add_mutually_exclusive_group()
    group.add_argument("--internal", action="store_true", help="use FilesInternalService")
    group.add_argument("--legacy", action="store_true", help="use the llmoperator worker service")

    return parser


async def run(args: argparse.Namespace) -> Any:
    init_req = InitReq(
        path_prefix=normalize_path_prefix(args.path_prefix) if args.path_prefix is not None else None,
        field_naming=FieldNaming(args.naming) if args.naming else None,
    )

    if args.command == "list":
        return await FilesService.list_files(ListFilesRequest(purpose=args.purpose), init_req)
    if args.command == "get":
        return await FilesService.get_file(GetFileRequest(id=args.id), init_req)
    if args.command == "delete":
        return await FilesService.delete_file(DeleteFileRequest(id=args.id), init_req)
    if args.command == "create-from-path":
        req = CreateFileFromObjectPathRequest(object_path=args.object_path, purpose=args.purpose)
        return await FilesService.create_file_from_object_path(req, init_req)
    if args.command == "upload":
        with args.path.open("rb") as fh:
            return await FilesService.create_file(fh, args.path.name, args.purpose, init_req)
    if args.command == "content":
        content = await FilesService.get_file_content(GetFileRequest(id=args.id), init_req)
        if args.output:
            args.output.write_bytes(content)
            return {"id": args.id, "bytes": len(content), "output": str(args.output)}
        sys.stdout.buffer.write(content)
        return None
    if args.command == "path":
        req = GetFilePathRequest(id=args.id)
        if args.internal:
            return await FilesInternalService.get_file_path(req, init_req)
        if args.legacy:
            return await legacy.FilesWorkerService.get_file_path(req, init_req)
        return await FilesWorkerService.get_file_path(req, init_req)
    raise ValueError(f"unknown command: {args.command}")


async def _main(args: argparse.Namespace) -> Any:
    try:
        return await run(args)
    finally:
        await close_default_client()


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.base_url:
        settings.files_api.base_url = args.base_url.rstrip("/")
    if args.debug:
        settings.DEBUG = True
    configure_logging(debug=settings.DEBUG)

    try:
        result = asyncio.run(_main(args))
    except APIError as exc:
        logger.error("files_api.error", error=str(exc), status_code=exc.status_code)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if isinstance(result, MessageBase):
        print(json.dumps(result.to_payload(), ensure_ascii=False, indent=2))
    elif result is not None:
        print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
