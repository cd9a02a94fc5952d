from core.config import FilesAPISettings, Settings
from infrastructure.external.api_clients import build_client
from shared.codes import FieldNaming


def test_nested_env_overrides(monkeypatch):
    monkeypatch.setenv("FILES_API__BASE_URL", "https://gw.example.com/")
    monkeypatch.setenv("FILES_API__PATH_PREFIX", "api/")
    monkeypatch.setenv("FILES_API__FIELD_NAMING", "camel")
    monkeypatch.setenv("FILES_API__MAX_RETRIES", "5")

    s = Settings()

    assert s.files_api.base_url == "https://gw.example.com"
    assert s.files_api.path_prefix == "/api"
    assert s.files_api.field_naming is FieldNaming.CAMEL
    assert s.files_api.max_retries == 5


def test_defaults():
    cfg = FilesAPISettings()
    assert cfg.path_prefix == ""
    assert cfg.field_naming is FieldNaming.PROTO
    assert cfg.api_key is None


def test_build_client_from_settings():
    cfg = FilesAPISettings(
        base_url="http://gw:8080",
        path_prefix="/v",
        api_key="sk-1",
        field_naming=FieldNaming.CAMEL,
    )

    c = build_client(cfg)

    assert c.base_url == "http://gw:8080"
    assert c.path_prefix == "/v"
    assert c.field_naming is FieldNaming.CAMEL
    assert c.default_headers["Authorization"] == "Bearer sk-1"
