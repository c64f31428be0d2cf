from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
from dotenv import load_dotenv

from .config_loader import ConfigError, load_config
from .client.b2_client import B2Client
from .core.errors import ConfigurationError
from .core.options import ClientOptions, DEFAULT_API_BASE_URL
from .secrets.sources import SecretsResolver
from .utils.log_setup import setup_logging


def build_options(cfg: Dict[str, Any], resolver: SecretsResolver) -> ClientOptions:
    application_key = resolver.secret("b2", "application_key")
    if not application_key:
        raise ConfigurationError("No application key for 'b2' (check secrets.method / secrets.mapping)")

    bucket = cfg["bucket"]
    api = cfg.get("api") or {}
    return ClientOptions(
        key_id=cfg["account"]["key_id"],
        application_key=application_key,
        persist_bucket=bucket["persist"],
        bucket_id=bucket.get("id") or "",
        api_base_url=api.get("base_url", DEFAULT_API_BASE_URL),
        timeout=float(api.get("timeout", 30.0)),
    )


def build_client(config_path: Path, http_client: Optional[httpx.Client] = None) -> Dict[str, Any]:
    """
    Composition root: load .env and YAML, set up logging, resolve the
    application key and build the client.
    Returns: dict with cfg, options, client.
    """
    load_dotenv()
    cfg = load_config(config_path)

    log_cfg = cfg.get("logging") or {}
    setup_logging(level=log_cfg.get("level", "INFO"), fmt=log_cfg.get("format", "plain"))

    secrets_cfg = cfg["secrets"]
    try:
        resolver = SecretsResolver(method=secrets_cfg["method"], mapping=secrets_cfg.get("mapping"))
    except ValueError as e:
        # Bad secrets.method is a config mistake, not a runtime failure
        raise ConfigError(str(e)) from e

    options = build_options(cfg, resolver)
    client = B2Client(options, http_client=http_client)

    return {
        "cfg": cfg,
        "options": options,
        "client": client,
    }
