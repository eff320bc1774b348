"""Command-line client settings loaded from YAML and the environment."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel

from pilotlog.cache_store import DEFAULT_CACHE_DIR

CONFIG_PATH = Path.home() / ".pilotlog" / "config.yaml"


class ClientConfig(BaseModel):
    """Where the API lives, how to authenticate, and where to cache."""

    base_url: str = "http://localhost:8000"
    token: str | None = None
    cache_dir: Path = DEFAULT_CACHE_DIR


def load_client_config(path: Path | None = None) -> ClientConfig:
    """Load client settings.

    Values from ``config.yaml`` are overridden by PILOTLOG_URL,
    PILOTLOG_TOKEN and PILOTLOG_CACHE_DIR. A missing file means defaults.

    Args:
        path: Override for the config file location (testing).
    """
    path = path or CONFIG_PATH
    data: dict = {}
    if path.exists():
        with open(path) as f:
            data = yaml.safe_load(f) or {}

    overrides = {
        "base_url": os.environ.get("PILOTLOG_URL"),
        "token": os.environ.get("PILOTLOG_TOKEN"),
        "cache_dir": os.environ.get("PILOTLOG_CACHE_DIR"),
    }
    data.update({k: v for k, v in overrides.items() if v})
    return ClientConfig(**data)
