# src/b2kit/client/b2_client.py
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Union

import httpx

from b2kit.core.options import ClientOptions
from b2kit.core.responses import check_for_errors
from b2kit.core.utilities import create_authorization_header, determine_bucket_id
from b2kit.models import AuthorizationInfo, Bucket, BucketOptions, BucketType

logger = logging.getLogger(__name__)

API_PREFIX = "/b2api/v2"


class B2Client:
    """
    Thin B2 API client.
    - authorizes lazily with the Basic header built from key_id/application_key
    - every response goes through check_for_errors before it is decoded
    - never retries; ApiError.retryable tells the caller whether it may
    """

    def __init__(self, options: ClientOptions, http_client: Optional[httpx.Client] = None):
        self.options = options
        self._owns_http = http_client is None
        self.http = http_client or httpx.Client(timeout=options.timeout)
        self._auth: Optional[AuthorizationInfo] = None
        self.buckets = Buckets(self)

    # ----- lifecycle -----

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "B2Client":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ----- auth -----

    @property
    def authorization(self) -> AuthorizationInfo:
        if self._auth is None:
            self.authorize()
        return self._auth  # type: ignore[return-value]

    def authorize(self) -> AuthorizationInfo:
        url = self.options.api_base_url.rstrip("/") + f"{API_PREFIX}/b2_authorize_account"
        logger.debug("GET %s", url)
        resp = self.http.get(
            url,
            headers={
                "Authorization": create_authorization_header(
                    self.options.key_id, self.options.application_key
                )
            },
        )
        logger.debug("b2_authorize_account -> %s", resp.status_code)
        check_for_errors(resp, "b2_authorize_account")
        self._auth = AuthorizationInfo.model_validate(resp.json())
        return self._auth

    # ----- calls -----

    def call(self, operation: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        auth = self.authorization
        url = auth.api_url.rstrip("/") + f"{API_PREFIX}/{operation}"
        logger.debug("POST %s", url)
        resp = self.http.post(url, json=payload, headers={"Authorization": auth.authorization_token})
        logger.debug("%s -> %s", operation, resp.status_code)
        check_for_errors(resp, operation)
        return resp.json()


def _as_options(options: Union[BucketOptions, BucketType, str]) -> BucketOptions:
    if isinstance(options, BucketOptions):
        return options
    return BucketOptions(bucket_type=BucketType(options))


class Buckets:
    def __init__(self, client: B2Client):
        self._client = client

    @property
    def _account_id(self) -> str:
        return self._client.authorization.account_id

    def get_list(self) -> List[Bucket]:
        data = self._client.call("b2_list_buckets", {"accountId": self._account_id})
        return [Bucket.model_validate(b) for b in data.get("buckets", [])]

    def get_by_name(self, name: str) -> Optional[Bucket]:
        data = self._client.call(
            "b2_list_buckets", {"accountId": self._account_id, "bucketName": name}
        )
        for b in data.get("buckets", []):
            bucket = Bucket.model_validate(b)
            if bucket.bucket_name == name:
                return bucket
        return None

    def create(
        self,
        name: str,
        options: Union[BucketOptions, BucketType, str] = BucketType.allPrivate,
    ) -> Bucket:
        payload = {"accountId": self._account_id, "bucketName": name, **_as_options(options).to_payload()}
        return Bucket.model_validate(self._client.call("b2_create_bucket", payload))

    def update(
        self,
        options: Union[BucketOptions, BucketType, str],
        bucket_id: Optional[str] = None,
        *,
        revision: Optional[int] = None,
    ) -> Bucket:
        """
        revision: only apply the update if the bucket is still at this revision
        (sent as ifRevisionMatch; B2 rejects a stale one).
        """
        resolved = determine_bucket_id(self._client.options, bucket_id)
        payload = {"accountId": self._account_id, "bucketId": resolved, **_as_options(options).to_payload()}
        if revision is not None:
            payload["ifRevisionMatch"] = int(revision)
        return Bucket.model_validate(self._client.call("b2_update_bucket", payload))

    def delete(self, bucket_id: Optional[str] = None) -> Bucket:
        resolved = determine_bucket_id(self._client.options, bucket_id)
        payload = {"accountId": self._account_id, "bucketId": resolved}
        return Bucket.model_validate(self._client.call("b2_delete_bucket", payload))
