from __future__ import annotations
import base64
import hashlib
from typing import Optional

from b2kit.core.errors import ConfigurationError
from b2kit.core.options import ClientOptions


def create_authorization_header(account_id: str, application_key: str) -> str:
    """
    B2 Basic auth header value: base64 of "accountId:applicationKey" (UTF-8).
    """
    raw = f"{account_id}:{application_key}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def hex_string_from_bytes(data: bytes) -> str:
    return bytes(data).hex()


def get_sha1_hash(data: bytes) -> str:
    """SHA-1 of the payload as 40 lowercase hex chars (X-Bz-Content-Sha1)."""
    return hex_string_from_bytes(hashlib.sha1(data).digest())


def determine_bucket_id(options: ClientOptions, bucket_id: Optional[str] = None) -> str:
    if not options.persist_bucket and not bucket_id:
        raise ConfigurationError(
            "bucket_id: you must either persist a bucket or provide a bucket_id in the method call."
        )
    # Persisted bucket overrides the per-call argument
    return options.bucket_id if options.persist_bucket else bucket_id
