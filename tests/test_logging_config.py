import pytest

from application.dto import ListFilesRequest
from core.logging_config import get_logger
from infrastructure.external.api_clients import FilesService


def test_logger_writes_nothing_to_stdout_before_configuration(capsys):
    log = get_logger("files.test")
    log.debug("files_api.request", path="/v1/files")
    log.info("files_api.created", base_url="http://files.test")

    assert capsys.readouterr().out == ""


@pytest.mark.asyncio
async def test_library_calls_keep_stdout_clean(client, gateway, capsys):
    gateway.respond(json_body={"object": "list", "data": []})

    await FilesService.list_files(ListFilesRequest())

    assert capsys.readouterr().out == ""
