"""Tests for client configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from pilotlog.config import load_client_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("PILOTLOG_URL", "PILOTLOG_TOKEN", "PILOTLOG_CACHE_DIR"):
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_file(tmp_path):
    config = load_client_config(tmp_path / "missing.yaml")
    assert config.base_url == "http://localhost:8000"
    assert config.token is None


def test_values_from_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "base_url: https://log.example.com\n"
        "token: abc123\n"
        f"cache_dir: {tmp_path / 'cache'}\n"
    )
    config = load_client_config(path)
    assert config.base_url == "https://log.example.com"
    assert config.token == "abc123"
    assert config.cache_dir == tmp_path / "cache"


def test_environment_overrides_yaml(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("base_url: https://log.example.com\ntoken: from-file\n")
    monkeypatch.setenv("PILOTLOG_TOKEN", "from-env")
    monkeypatch.setenv("PILOTLOG_CACHE_DIR", "/tmp/pilotlog-cache")

    config = load_client_config(path)
    assert config.base_url == "https://log.example.com"
    assert config.token == "from-env"
    assert config.cache_dir == Path("/tmp/pilotlog-cache")


def test_empty_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_client_config(path).base_url == "http://localhost:8000"
