"""
Single source of truth for dashboard settings.
Loads config/dashboard.yaml and overrides with env vars so the dashboard can point at
different data services (e.g. local mock, staging) without code changes.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

import yaml

ROOT = Path(__file__).resolve().parent.parent.parent

logger = logging.getLogger("kpi_dashboard")

# Defaults (paths relative to ROOT)
_DEFAULTS = {
    "api_base": "http://localhost:8000/api",
    "api_timeout": 15,
    "storage_path": "data/local_storage.json",
    "session_ttl_seconds": 3600,
    "session_check_seconds": 3,
    "log_level": "INFO",
    "sentry_dsn": "",
    "env": "dev",
}

_ENV_VARS = {
    "api_base": "KPI_API_BASE",
    "api_timeout": "KPI_API_TIMEOUT",
    "storage_path": "KPI_STORAGE_PATH",
    "session_ttl_seconds": "KPI_SESSION_TTL",
    "session_check_seconds": "KPI_SESSION_CHECK",
    "log_level": "KPI_LOG_LEVEL",
    "sentry_dsn": "SENTRY_DSN",
    "env": "ENV",
}

_NUMERIC_KEYS = ("api_timeout", "session_ttl_seconds", "session_check_seconds")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _load_yaml(yaml_path: Path) -> dict:
    out = _DEFAULTS.copy()
    if not yaml_path.exists():
        return out
    with open(yaml_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    for k, v in data.items():
        if k in out and v is not None:
            out[k] = v
    return out


def _resolve_path(value: str) -> Path:
    p = Path(value)
    if not p.is_absolute():
        p = ROOT / value
    return p


def load_config(
    yaml_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> dict:
    """Merge defaults, the YAML file and environment overrides (in that order).

    Numeric keys are coerced to float; ``log_level`` falls back to INFO when invalid.
    """
    yaml_path = yaml_path if yaml_path is not None else ROOT / "config" / "dashboard.yaml"
    environ = os.environ if environ is None else environ

    cfg = _load_yaml(yaml_path)
    for key, env_key in _ENV_VARS.items():
        val = environ.get(env_key)
        if val is not None and val != "":
            cfg[key] = val

    for key in _NUMERIC_KEYS:
        try:
            cfg[key] = float(cfg[key])
        except (TypeError, ValueError):
            logger.warning(f"Invalid {key} '{cfg[key]}' in config, using {_DEFAULTS[key]}")
            cfg[key] = float(_DEFAULTS[key])

    level = str(cfg["log_level"]).upper()
    if level not in _LOG_LEVELS:
        logger.warning(f"Invalid log_level '{cfg['log_level']}' in config, using INFO")
        level = "INFO"
    cfg["log_level"] = level
    return cfg


_cfg = load_config()

API_BASE = str(_cfg["api_base"]).rstrip("/")
API_TIMEOUT = _cfg["api_timeout"]
STORAGE_PATH = _resolve_path(str(_cfg["storage_path"]))
SESSION_TTL_SECONDS = _cfg["session_ttl_seconds"]
SESSION_CHECK_SECONDS = _cfg["session_check_seconds"]
LOG_LEVEL = _cfg["log_level"]
SENTRY_DSN = _cfg["sentry_dsn"] or None
ENV = _cfg.get("env", "dev")
