from datetime import datetime, timezone

from application.dto import (
    CreateFileFromObjectPathRequest,
    File,
    GetFilePathRequest,
    ListFilesResponse,
)
from shared.codes import FieldNaming


def test_file_accepts_both_naming_generations():
    camel = File.model_validate({"id": "f0", "createdAt": "1700000000", "bytes": "12"})
    snake = File.model_validate({"id": "f0", "created_at": 1700000000, "bytes": 12})

    assert camel == snake
    assert camel.created_at == 1700000000
    assert camel.bytes == 12


def test_created_at_datetime():
    f = File(created_at=0)
    assert f.created_at_datetime == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert File().created_at_datetime is None


def test_to_payload_naming():
    req = CreateFileFromObjectPathRequest(object_path="s3://b/k", purpose="fine-tune")

    assert req.to_payload() == {"object_path": "s3://b/k", "purpose": "fine-tune"}
    assert req.to_payload(FieldNaming.CAMEL) == {"objectPath": "s3://b/k", "purpose": "fine-tune"}
    assert req.to_payload("camel") == {"objectPath": "s3://b/k", "purpose": "fine-tune"}


def test_to_payload_leaves_out_unset_fields():
    assert GetFilePathRequest().to_payload() == {}


def test_unknown_fields_are_ignored():
    resp = ListFilesResponse.model_validate(
        {"object": "list", "data": [{"id": "f0", "organization_id": "o0"}], "has_more": False}
    )
    assert resp.data[0].id == "f0"
    assert not hasattr(resp, "has_more")


def test_constructor_accepts_alias():
    assert CreateFileFromObjectPathRequest(objectPath="s3://b/k").object_path == "s3://b/k"
