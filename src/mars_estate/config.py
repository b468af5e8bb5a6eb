"""Configuration loader."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .models import ListingsFilter

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config.yaml"

DEFAULTS: dict[str, Any] = {
    "api": {
        "base_url": "https://mars.udacity.com/",
        "endpoint": "realestate",
        "timeout_seconds": 30,
    },
    "connectivity": {
        "host": "8.8.8.8",
        "port": 53,
        "timeout_seconds": 3,
    },
    "default_filter": "all",
    "log_level": "WARNING",
}


@dataclass
class ApiSettings:
    """Listings API endpoint settings."""

    base_url: str
    endpoint: str
    timeout_seconds: float


@dataclass
class ConnectivitySettings:
    """Target of the TCP reachability check."""

    host: str
    port: int
    timeout_seconds: float


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load config from YAML file.

    An explicit path must exist. Without one, the repo-root config.yaml is
    used if present, otherwise the built-in defaults.
    """
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")
    else:
        path = DEFAULT_CONFIG_PATH
        if not path.exists():
            return _merge(DEFAULTS, {})
    with open(path) as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config must be a mapping: {path}")
    return _merge(DEFAULTS, loaded)


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursive dict merge; values from ``override`` win."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_api_settings(config: dict[str, Any]) -> ApiSettings:
    """Extract API settings. MARS_ESTATE_BASE_URL overrides api.base_url."""
    api = config.get("api", {})
    return ApiSettings(
        base_url=os.environ.get("MARS_ESTATE_BASE_URL") or str(api.get("base_url", DEFAULTS["api"]["base_url"])),
        endpoint=str(api.get("endpoint", DEFAULTS["api"]["endpoint"])),
        timeout_seconds=float(api.get("timeout_seconds", 30)),
    )


def get_connectivity_settings(config: dict[str, Any]) -> ConnectivitySettings:
    """Extract connectivity probe settings."""
    conn = config.get("connectivity", {})
    return ConnectivitySettings(
        host=str(conn.get("host", "8.8.8.8")),
        port=int(conn.get("port", 53)),
        timeout_seconds=float(conn.get("timeout_seconds", 3)),
    )


def get_default_filter(config: dict[str, Any]) -> ListingsFilter | None:
    """Filter for the initial fetch. Empty or null means no filter."""
    raw = config.get("default_filter")
    if raw is None or str(raw).strip() == "":
        return None
    return ListingsFilter.parse(str(raw))
