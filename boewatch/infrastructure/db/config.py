"""Project configuration read from an optional ``config.json``."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

DEFAULT_DB_TIMEOUT = 30.0

_REPO_ROOT = Path(__file__).resolve().parents[3]
_CONFIG_FILE = _REPO_ROOT / "config.json"

HTTP_DEFAULTS: Dict[str, Any] = {
    "timeout_seconds": 10.0,
    "retry_attempts": 5,
    "backoff_base_seconds": 0.5,
    "max_concurrent_requests": 6,
}

GEOCODING_DEFAULTS: Dict[str, Any] = {
    "enabled": True,
    "base_url": "http://nominatim.openstreetmap.org/search.php",
    "min_interval_seconds": 1.0,
    "country": "Spain",
    "timeout_seconds": 10.0,
}


def load_config(config_path: Path | str | None = None) -> Dict[str, Any]:
    """Load ``config.json`` if present and return it as a dictionary."""

    path = Path(config_path) if config_path is not None else _CONFIG_FILE
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def get_path_config(config_path: Path | str | None = None) -> Dict[str, Path]:
    """Return resolved filesystem paths from the project configuration.

    Relative paths are resolved against the directory holding the config file.
    """

    cfg = load_config(config_path)
    root = Path(config_path).parent if config_path is not None else _CONFIG_FILE.parent
    defaults = {
        "db_path": Path("db") / "boewatch.db",
        "export_path": Path("export") / "auctions.json.gz",
    }
    resolved: Dict[str, Path] = {}
    for key, default_value in defaults.items():
        resolved_value = Path(cfg.get(key, default_value))
        if not resolved_value.is_absolute():
            resolved_value = (root / resolved_value).resolve()
        resolved[key] = resolved_value
    return resolved


def get_default_timeout(config_path: Path | str | None = None) -> float:
    """Read the preferred database timeout from configuration."""

    cfg = load_config(config_path)
    try:
        return float(cfg.get("db_timeout_seconds", DEFAULT_DB_TIMEOUT))
    except (TypeError, ValueError):
        return DEFAULT_DB_TIMEOUT


def _section(
    config_path: Path | str | None, name: str, defaults: Dict[str, Any]
) -> Dict[str, Any]:
    cfg = load_config(config_path)
    section = cfg.get(name, {})
    if not isinstance(section, dict):
        section = {}
    merged = dict(defaults)
    for key, default_value in defaults.items():
        if key not in section:
            continue
        try:
            merged[key] = type(default_value)(section[key])
        except (TypeError, ValueError):
            merged[key] = default_value
    return merged


def get_http_config(config_path: Path | str | None = None) -> Dict[str, Any]:
    """Fetcher settings from the ``http`` section, defaults filled in."""

    return _section(config_path, "http", HTTP_DEFAULTS)


def get_geocoding_config(config_path: Path | str | None = None) -> Dict[str, Any]:
    """Geocoder settings from the ``geocoding`` section, defaults filled in."""

    return _section(config_path, "geocoding", GEOCODING_DEFAULTS)
