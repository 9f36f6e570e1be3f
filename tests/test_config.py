"""Tests for pageshell.config: AppConfig and site configuration loading."""

import dataclasses
import json
from pathlib import Path

import pytest

from pageshell.config import AppConfig, SiteConfig, load_site_config, site_config_from_mapping
from pageshell.errors import ConfigurationError

FLAT = {
    "db.URI": "cluster0.example.net/notes",
    "db.username": "ada",
    "db.password": "s3cret",
    "jwt.secret": "signing-key",
}

NESTED = {
    "db": {"URI": "cluster0.example.net/notes", "username": "ada", "password": "s3cret"},
    "jwt": {"secret": "signing-key"},
}

EXPECTED = SiteConfig(
    db_uri="cluster0.example.net/notes",
    db_username="ada",
    db_password="s3cret",
    jwt_secret="signing-key",
)


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "config.json"
    path.write_text(content, encoding="utf-8")
    return path


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.debug is False
        assert config.not_found_title == "404 - Not Found"
        assert config.logout_path == "/logout"

    def test_frozen(self) -> None:
        config = AppConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.port = 9000  # type: ignore[misc]

    def test_override(self) -> None:
        config = AppConfig(site_title="Notes", api_base_url="https://api.test")
        assert config.site_title == "Notes"
        assert config.api_base_url == "https://api.test"


class TestSiteConfigFromMapping:
    def test_flat_keys(self) -> None:
        assert site_config_from_mapping(FLAT) == EXPECTED

    def test_nested_keys(self) -> None:
        assert site_config_from_mapping(NESTED) == EXPECTED

    def test_missing_keys_are_named(self) -> None:
        data = {"db.URI": "host"}
        with pytest.raises(ConfigurationError) as exc_info:
            site_config_from_mapping(data)
        message = str(exc_info.value)
        assert "db.username" in message
        assert "db.password" in message
        assert "jwt.secret" in message
        assert "db.URI" not in message

    def test_repr_hides_secrets(self) -> None:
        text = repr(EXPECTED)
        assert "s3cret" not in text
        assert "signing-key" not in text
        assert "ada" in text


class TestLoadSiteConfig:
    def test_load_flat(self, tmp_path: Path) -> None:
        assert load_site_config(_write(tmp_path, json.dumps(FLAT))) == EXPECTED

    def test_load_nested(self, tmp_path: Path) -> None:
        assert load_site_config(_write(tmp_path, json.dumps(NESTED))) == EXPECTED

    def test_default_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write(tmp_path, json.dumps(FLAT))
        monkeypatch.chdir(tmp_path)
        assert load_site_config() == EXPECTED

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            load_site_config(tmp_path / "config.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not valid JSON"):
            load_site_config(_write(tmp_path, "{nope"))

    def test_not_an_object(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="JSON object"):
            load_site_config(_write(tmp_path, "[]"))
