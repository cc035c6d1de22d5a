"""Configuration management for idk."""

import json
import os
from pathlib import Path
from typing import Any

CONFIG_FILE_NAME = "config.json"
DEFAULT_API_URL = "http://localhost:8080"


def get_idk_home() -> Path:
    """Get the idk config directory (``IDK_HOME`` or ``~/.idk``)."""
    if os.environ.get("IDK_HOME"):
        return Path(os.environ["IDK_HOME"])
    return Path.home() / ".idk"


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_idk_home() / CONFIG_FILE_NAME


def load_config() -> dict[str, Any]:
    """Load configuration, or an empty dict if there is none yet."""
    config_path = get_config_path()
    if not config_path.exists():
        return {}
    with open(config_path) as f:
        return json.load(f)


def save_config(config: dict[str, Any]):
    """Write configuration, readable by the owner only."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        json.dump(config, f, indent=2)
    config_path.chmod(0o600)


def get_api_base_url() -> str:
    """Get the backend base URL: ``IDK_API_URL``, then config, then default."""
    if os.environ.get("IDK_API_URL"):
        return os.environ["IDK_API_URL"]
    return load_config().get("backend_url") or DEFAULT_API_URL


def get_token() -> str | None:
    """Get the saved session token."""
    return load_config().get("token") or None


def save_token(token: str):
    config = load_config()
    config["token"] = token
    save_config(config)


def clear_token():
    config = load_config()
    if config.pop("token", None) is not None:
        save_config(config)


def get_alias(name: str) -> str | None:
    """Get the script stored under an alias."""
    return load_config().get("aliases", {}).get(name)


def save_alias(name: str, script: str):
    config = load_config()
    config.setdefault("aliases", {})[name] = script
    save_config(config)
