# src/b2kit/config_loader.py

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict
import yaml

from b2kit.core.errors import ConfigurationError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_LOG_FORMATS = ("plain", "json")


class ConfigError(ConfigurationError):
    pass


def _require(d: Dict[str, Any], dotted: str, typ: type) -> Any:
    cur: Any = d
    for k in dotted.split("."):
        if not isinstance(cur, dict) or k not in cur:
            raise ConfigError(f"Missing config key: {dotted}")
        cur = cur[k]
    if typ is bool and not isinstance(cur, bool):
        raise ConfigError(f"'{dotted}' must be a boolean")
    if typ is str and not isinstance(cur, str):
        raise ConfigError(f"'{dotted}' must be a string")
    return cur


def load_config(path: Path) -> Dict[str, Any]:
    if not path or not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    raw = yaml.safe_load(path.read_text())
    if not isinstance(raw, dict) or not raw:
        raise ConfigError(f"Config is empty or invalid YAML: {path}")

    # Validate required keys (no defaults here)
    _require(raw, "account.key_id", str)
    persist = _require(raw, "bucket.persist", bool)
    _require(raw, "secrets.method", object)  # str or list

    bucket_id = raw["bucket"].get("id")
    if bucket_id is not None and not isinstance(bucket_id, str):
        raise ConfigError("'bucket.id' must be a string")
    if persist and not bucket_id:
        raise ConfigError("'bucket.id' is required when 'bucket.persist' is true")

    api = raw.get("api") or {}
    if "base_url" in api and not isinstance(api["base_url"], str):
        raise ConfigError("'api.base_url' must be a string")
    if "timeout" in api and (isinstance(api["timeout"], bool) or not isinstance(api["timeout"], (int, float))):
        raise ConfigError("'api.timeout' must be a number")

    # Normalise enumerations
    log = raw.get("logging")
    if log is not None:
        if not isinstance(log, dict):
            raise ConfigError("'logging' must be a mapping")
        if "level" in log:
            level = str(log["level"]).upper()
            if level not in _LOG_LEVELS:
                raise ConfigError(f"Unknown logging.level '{log['level']}' (expected one of {', '.join(_LOG_LEVELS)}).")
            log["level"] = level
        if "format" in log:
            fmt = str(log["format"]).lower()
            if fmt not in _LOG_FORMATS:
                raise ConfigError(f"Unknown logging.format '{log['format']}' (expected 'plain' or 'json').")
            log["format"] = fmt

    return raw
