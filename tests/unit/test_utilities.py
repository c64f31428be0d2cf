# tests/unit/test_utilities.py

from __future__ import annotations
import base64
import hashlib
import sys
from pathlib import Path
import pytest

# Make "src" importable
sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from b2kit.core.errors import ConfigurationError
from b2kit.core.options import ClientOptions
from b2kit.core.utilities import (
    create_authorization_header,
    determine_bucket_id,
    get_sha1_hash,
    hex_string_from_bytes,
)


def _opts(persist=False, bucket_id=""):
    return ClientOptions(key_id="kid", application_key="secret", persist_bucket=persist, bucket_id=bucket_id)


# -------- credential encoder --------

@pytest.mark.parametrize("account,key", [
    ("000abc123", "K000xyz"),
    ("acct", "key:with:colons"),
    ("ünïcode", "clé"),
])
def test_authorization_header_decodes_to_pair(account, key):
    header = create_authorization_header(account, key)
    assert header.startswith("Basic ")
    decoded = base64.b64decode(header[len("Basic "):]).decode("utf-8")
    assert decoded == f"{account}:{key}"


def test_authorization_header_known_value():
    # RFC 7617 example credentials
    assert create_authorization_header("Aladdin", "open sesame") == "Basic QWxhZGRpbjpvcGVuIHNlc2FtZQ=="


# -------- hashing --------

def test_hex_string_is_lowercase_without_separators():
    assert hex_string_from_bytes(b"\x00\xab\xff\x10") == "00abff10"


def test_sha1_of_empty_payload():
    assert get_sha1_hash(b"") == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


@pytest.mark.parametrize("payload", [b"hello world", bytes(range(256)), b"x" * 10_000])
def test_sha1_matches_hashlib_and_is_stable(payload):
    digest = get_sha1_hash(payload)
    assert digest == hashlib.sha1(payload).hexdigest()
    assert digest == get_sha1_hash(payload)
    assert len(digest) == 40 and digest == digest.lower()


# -------- bucket resolver --------

def test_bucket_missing_without_persistence_raises():
    with pytest.raises(ConfigurationError) as ei:
        determine_bucket_id(_opts(), "")
    assert "bucket_id" in str(ei.value)


def test_bucket_none_without_persistence_raises():
    with pytest.raises(ConfigurationError):
        determine_bucket_id(_opts(), None)


def test_persisted_bucket_overrides_argument():
    assert determine_bucket_id(_opts(persist=True, bucket_id="X"), "Y") == "X"
    assert determine_bucket_id(_opts(persist=True, bucket_id="X"), None) == "X"


def test_per_call_bucket_used_without_persistence():
    assert determine_bucket_id(_opts(), "Y") == "Y"


def test_configuration_error_is_value_error():
    # callers that only know about ValueError still catch it
    with pytest.raises(ValueError):
        determine_bucket_id(_opts(), "")


def test_options_repr_hides_application_key():
    assert "secret" not in repr(_opts())
