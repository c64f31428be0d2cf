# src/b2kit/secrets/sources.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, Optional, Dict, Iterable, List, Tuple, Union
import getpass
import os
import subprocess
import sys

try:
    import keyring as _keyring
except Exception:
    _keyring = None  # optional extra: pip install b2kit[keyring]


class SecretSource(Protocol):
    def get(self, service: str) -> Optional[str]: ...


def _clean(val: Optional[str]) -> Optional[str]:
    val = (val or "").strip()
    return val or None


@dataclass
class EnvSource:
    """
    Looks up `service` as an env var name first, then derived names:
    "b2" -> B2_APPLICATION_KEY, B2.
    """
    suffixes: Tuple[str, ...] = ("_APPLICATION_KEY", "")

    def candidates(self, service: str) -> List[str]:
        return [service] + [service.upper() + s for s in self.suffixes]

    def get(self, service: str) -> Optional[str]:
        for key in self.candidates(service):
            val = _clean(os.getenv(key))
            if val:
                return val
        return None


@dataclass
class SystemKeyringSource:
    """
    OS keychain via `keyring` when installed; on macOS falls back to the
    `security` tool so a plain Keychain item also works.
    """
    accounts: Tuple[str, ...] = ("application_key", "B2_APPLICATION_KEY", "default")

    def _from_keyring(self, service: str) -> Optional[str]:
        if _keyring is None:
            return None
        try:
            cred = _keyring.get_credential(service, None)  # type: ignore[arg-type]
        except Exception:
            cred = None
        if cred is not None and _clean(getattr(cred, "password", None)):
            return _clean(cred.password)
        for account in (*self.accounts, service, getpass.getuser()):
            try:
                val = _clean(_keyring.get_password(service, account))
            except Exception:
                continue
            if val:
                return val
        return None

    def _from_security_tool(self, service: str) -> Optional[str]:
        if sys.platform != "darwin":
            return None
        try:
            proc = subprocess.run(
                ["security", "find-generic-password", "-s", service, "-w"],
                capture_output=True, text=True, check=False,
            )
        except OSError:
            return None
        return _clean(proc.stdout) if proc.returncode == 0 else None

    def get(self, service: str) -> Optional[str]:
        return self._from_keyring(service) or self._from_security_tool(service)


_SOURCES = {"env": EnvSource, "keyring": SystemKeyringSource}


def build_secret_sources(method: Union[str, Iterable[str]]) -> List[SecretSource]:
    names = [method] if isinstance(method, str) else list(method)
    sources: List[SecretSource] = []
    seen = set()
    for m in names:
        key = str(m).strip().lower()
        if key not in _SOURCES:
            raise ValueError(f"Unknown secrets method '{m}'. Allowed: {sorted(_SOURCES)}")
        if key in seen:
            continue
        seen.add(key)
        sources.append(_SOURCES[key]())
    return sources


class SecretsResolver:
    """
    Resolve an account secret by trying each configured source in order.
    mapping: { "<service>": { "<secret name>": "<service or env var>" } }
      e.g. { "b2": { "application_key": "B2_APPLICATION_KEY" } }
    Without a mapping entry the service name itself is looked up.
    """
    def __init__(self, method: Union[str, Iterable[str]], mapping: Optional[Dict[str, Dict[str, str]]] = None):
        self._sources = build_secret_sources(method)
        self._map = mapping or {}

    def secret(self, service: str = "b2", name: str = "application_key") -> Optional[str]:
        lookup = (self._map.get(service) or {}).get(name, service)
        for src in self._sources:
            val = src.get(lookup)
            if val:
                return val
        return None
