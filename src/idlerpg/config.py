"""User configuration helpers (definitions location and log level)."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)

_DEFAULT_LOG_LEVEL = "WARNING"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "IdleRPG"
        return Path.home() / "IdleRPG"
    return Path.home() / ".config" / "idlerpg"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def _normalize_log_level(value: object) -> str:
    if isinstance(value, str) and value.upper() in _LOG_LEVELS:
        return value.upper()
    return _DEFAULT_LOG_LEVEL


def _normalize_definitions_path(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def default_config() -> Dict[str, str | None]:
    return {"definitions_path": None, "log_level": _DEFAULT_LOG_LEVEL}


def _normalize(raw: Dict[str, object]) -> Dict[str, str | None]:
    return {
        "definitions_path": _normalize_definitions_path(raw.get("definitions_path")),
        "log_level": _normalize_log_level(raw.get("log_level")),
    }


def load_config(path: Path | None = None) -> Dict[str, str | None]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return default_config()
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return default_config()
    if not isinstance(raw, dict):
        logger.warning("Ignoring config %s: top level is not an object", config_path)
        return default_config()
    return _normalize(raw)


def save_config(config: Dict[str, str | None], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = _normalize(dict(config))
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")


def configure_logging(config: Dict[str, str | None]) -> None:
    """Apply the configured level to the package logger."""
    level = _normalize_log_level(config.get("log_level"))
    logging.getLogger("idlerpg").setLevel(getattr(logging, level))
