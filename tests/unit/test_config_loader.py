# tests/unit/test_config_loader.py

from __future__ import annotations
import sys
from pathlib import Path
import pytest
from textwrap import dedent

# Make "src" importable
sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from b2kit.config_loader import load_config, ConfigError  # type: ignore
from b2kit.core.errors import ConfigurationError


def write_yaml(p: Path, text: str) -> Path:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(dedent(text).lstrip("\n").rstrip() + "\n", encoding="utf-8")
    return p


def test_load_config_ok(tmp_path: Path):
    cfg = write_yaml(
        tmp_path / "config" / "default.yaml",
        """
        account: { key_id: "0012abc" }
        bucket: { persist: true, id: "b-1" }
        api: { base_url: "https://api.example.test", timeout: 5 }
        secrets: { method: [env, keyring] }
        logging: { level: debug, format: JSON }
        """,
    )
    data = load_config(cfg)
    assert data["account"]["key_id"] == "0012abc"
    assert data["bucket"]["id"] == "b-1"
    assert data["logging"] == {"level": "DEBUG", "format": "json"}   # normalised
    assert data["api"]["timeout"] == 5


def test_load_config_missing_key(tmp_path: Path):
    cfg = write_yaml(
        tmp_path / "config" / "default.yaml",
        """
        bucket: { persist: false }        # missing account.key_id
        secrets: { method: env }
        """,
    )
    with pytest.raises(ConfigError):
        load_config(cfg)


def test_load_config_type_error(tmp_path: Path):
    cfg = write_yaml(
        tmp_path / "config" / "default.yaml",
        """
        account: { key_id: "k" }
        bucket: { persist: "yes" }   # wrong type
        secrets: { method: env }
        """,
    )
    with pytest.raises(ConfigError):
        load_config(cfg)


def test_persist_requires_bucket_id(tmp_path: Path):
    cfg = write_yaml(
        tmp_path / "config" / "default.yaml",
        """
        account: { key_id: "k" }
        bucket: { persist: true, id: "" }
        secrets: { method: env }
        """,
    )
    # ConfigError is a ConfigurationError
    with pytest.raises(ConfigurationError):
        load_config(cfg)


def test_missing_secrets_method(tmp_path: Path):
    cfg = write_yaml(
        tmp_path / "config" / "default.yaml",
        """
        account: { key_id: "k" }
        bucket: { persist: false }
        secrets: { mapping: {} }
        """,
    )
    with pytest.raises(ConfigError):
        load_config(cfg)


def test_unknown_log_level(tmp_path: Path):
    cfg = write_yaml(
        tmp_path / "config" / "default.yaml",
        """
        account: { key_id: "k" }
        bucket: { persist: false }
        secrets: { method: env }
        logging: { level: loud }
        """,
    )
    with pytest.raises(ConfigError):
        load_config(cfg)


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")
