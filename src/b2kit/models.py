from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BucketType(str, Enum):
    allPublic = "allPublic"
    allPrivate = "allPrivate"
    snapshot = "snapshot"


class _Wire(BaseModel):
    # B2 payloads are camelCase; accept snake_case too and ignore the rest
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class AllowedInfo(_Wire):
    capabilities: List[str] = Field(default_factory=list)
    bucket_id: Optional[str] = Field(default=None, alias="bucketId")
    bucket_name: Optional[str] = Field(default=None, alias="bucketName")
    name_prefix: Optional[str] = Field(default=None, alias="namePrefix")


class AuthorizationInfo(_Wire):
    account_id: str = Field(alias="accountId")
    authorization_token: str = Field(alias="authorizationToken")
    api_url: str = Field(alias="apiUrl")
    download_url: str = Field(alias="downloadUrl")
    recommended_part_size: Optional[int] = Field(default=None, alias="recommendedPartSize")
    absolute_minimum_part_size: Optional[int] = Field(default=None, alias="absoluteMinimumPartSize")
    allowed: Optional[AllowedInfo] = None


class CorsRule(_Wire):
    cors_rule_name: str = Field(alias="corsRuleName")
    allowed_origins: List[str] = Field(alias="allowedOrigins")
    allowed_operations: List[str] = Field(alias="allowedOperations")
    allowed_headers: Optional[List[str]] = Field(default=None, alias="allowedHeaders")
    expose_headers: Optional[List[str]] = Field(default=None, alias="exposeHeaders")
    max_age_seconds: int = Field(default=3600, alias="maxAgeSeconds")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Bucket(_Wire):
    account_id: Optional[str] = Field(default=None, alias="accountId")
    bucket_id: str = Field(alias="bucketId")
    bucket_name: str = Field(alias="bucketName")
    bucket_type: str = Field(alias="bucketType")
    bucket_info: Dict[str, str] = Field(default_factory=dict, alias="bucketInfo")
    cors_rules: List[CorsRule] = Field(default_factory=list, alias="corsRules")
    revision: Optional[int] = None


@dataclass
class BucketOptions:
    """
    Settings for create/update. cache_control (seconds) is stored by B2 as
    bucketInfo["cache-control"] = "max-age=N". cors_rules=None leaves the
    bucket's CORS rules alone; an empty list clears them.
    """

    bucket_type: BucketType = BucketType.allPrivate
    cache_control: Optional[int] = None
    bucket_info: Dict[str, str] = field(default_factory=dict)
    cors_rules: Optional[List[CorsRule]] = None

    def info_payload(self) -> Dict[str, str]:
        info = dict(self.bucket_info)
        if self.cache_control is not None:
            info["cache-control"] = f"max-age={int(self.cache_control)}"
        return info

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "bucketType": BucketType(self.bucket_type).value,
            "bucketInfo": self.info_payload(),
        }
        if self.cors_rules is not None:
            payload["corsRules"] = [r.to_payload() for r in self.cors_rules]
        return payload
