"""
Configuration — ~/.focusmode/config.json plus environment overrides.
"""

import json
import os
from pathlib import Path
from typing import Any

DEFAULT_BASE_URL = "http://localhost:3000"


def home_dir() -> Path:
    return Path(os.environ.get("FOCUSMODE_HOME") or Path.home() / ".focusmode")


def config_file() -> Path:
    return home_dir() / "config.json"


def data_dir() -> Path:
    return home_dir() / "data"


def load_config() -> dict[str, Any]:
    try:
        return json.loads(config_file().read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def save_config(cfg: dict[str, Any]) -> None:
    path = config_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(cfg, indent=2))


def base_url(cfg: dict[str, Any]) -> str:
    return os.environ.get("FOCUSMODE_BASE_URL") or cfg.get("base_url") or DEFAULT_BASE_URL
