from __future__ import annotations
from dataclasses import dataclass

DEFAULT_API_BASE_URL = "https://api.backblazeb2.com"


@dataclass(frozen=True)
class ClientOptions:
    """
    Session-wide settings, built once per client and shared read-only.
    If persist_bucket is set, bucket_id wins over any per-call bucket id.
    """

    key_id: str
    application_key: str
    persist_bucket: bool = False
    bucket_id: str = ""
    api_base_url: str = DEFAULT_API_BASE_URL
    timeout: float = 30.0

    def __repr__(self) -> str:
        # keep the application key out of logs/tracebacks
        return (
            f"ClientOptions(key_id={self.key_id!r}, persist_bucket={self.persist_bucket}, "
            f"bucket_id={self.bucket_id!r}, api_base_url={self.api_base_url!r})"
        )
