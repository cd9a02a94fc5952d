import json

import pytest

import main as cli


@pytest.fixture
async def wired(client, monkeypatch):
    """Keep the fake-gateway client alive across the CLI's own shutdown."""
    async def _noop():
        return None

    monkeypatch.setattr(cli, "close_default_client", _noop)
    monkeypatch.setattr(cli, "configure_logging", lambda debug=False: None)
    return client


@pytest.mark.asyncio
async def test_list_command(wired, gateway):
    gateway.respond(json_body={"object": "list", "data": [{"id": "f0", "createdAt": "10"}]})

    args = cli.build_parser().parse_args(["list", "--purpose", "fine-tune"])
    result = await cli.run(args)

    assert result.data[0].id == "f0"
    assert gateway.last.url.params["purpose"] == "fine-tune"


@pytest.mark.asyncio
async def test_path_command_variants(wired, gateway):
    parser = cli.build_parser()

    await cli.run(parser.parse_args(["path", "f0"]))
    await cli.run(parser.parse_args(["path", "f0", "--internal"]))
    await cli.run(parser.parse_args(["path", "f0", "--legacy"]))

    assert [r.url.path for r in gateway.requests] == [
        "/llmariner.files.server.v1.FilesWorkerService/GetFilePath",
        "/llmariner.files.server.v1.FilesInternalService/GetFilePath",
        "/llmoperator.files.server.v1.FilesWorkerService/GetFilePath",
    ]


@pytest.mark.asyncio
async def test_create_from_path_with_camel_naming(wired, gateway):
    args = cli.build_parser().parse_args(
        ["--naming", "camel", "create-from-path", "s3://b/k", "--purpose", "assistants"]
    )

    await cli.run(args)

    assert json.loads(gateway.last.content) == {"objectPath": "s3://b/k", "purpose": "assistants"}


@pytest.mark.asyncio
async def test_content_command_writes_output(wired, gateway, tmp_path):
    gateway.respond(content=b"abc", headers={"content-type": "application/octet-stream"})
    out = tmp_path / "out.bin"

    result = await cli.run(cli.build_parser().parse_args(["content", "f0", "-o", str(out)]))

    assert out.read_bytes() == b"abc"
    assert result["bytes"] == 3


def test_main_reports_api_errors(monkeypatch, capsys):
    from infrastructure.external.api_clients import NotFoundError

    async def _fail(args):
        raise NotFoundError("file \"f0\" not found", status_code=404)

    async def _noop():
        return None

    monkeypatch.setattr(cli, "run", _fail)
    monkeypatch.setattr(cli, "close_default_client", _noop)
    monkeypatch.setattr(cli, "configure_logging", lambda debug=False: None)

    assert cli.main(["get", "f0"]) == 1
    assert 'file "f0" not found' in capsys.readouterr().err


@pytest.mark.asyncio
async def test_path_prefix_flag_is_normalized(wired, gateway):
    args = cli.build_parser().parse_args(["--path-prefix", "api/", "list"])

    await cli.run(args)

    assert gateway.last.url.path == "/api/v1/files"
