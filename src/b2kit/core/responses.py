from __future__ import annotations
import json
from dataclasses import dataclass
from typing import Optional

import httpx
from pydantic import BaseModel, ConfigDict, field_validator

from b2kit.core.errors import ApiError, MalformedResponseError

# Rate limited, request timeout, service unavailable
RETRYABLE_STATUS_CODES = frozenset({408, 429, 503})

_UNAUTHORIZED_HINT = (
    "Unauthorized error when operating on {api}. Are you sure the key you are using has access? {message}"
)


class StructuredError(BaseModel):
    """The JSON error envelope B2 returns on failure."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    code: Optional[str] = None
    status: Optional[str] = None
    message: Optional[str] = None

    @field_validator("code", "status", "message", mode="before")
    @classmethod
    def _scalar_to_str(cls, v):
        # JSON booleans are kept as text ("True"/"False"), the same as numbers
        if isinstance(v, bool):
            return str(v)
        return v


@dataclass(frozen=True)
class ResponseCheck:
    status_code: int
    error: Optional[ApiError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


def parse_structured_error(text: str, status_code: Optional[int] = None) -> Optional[StructuredError]:
    """
    Returns None when the body is empty or a JSON null (no error detail).
    Anything that is not JSON, or not a JSON object, raises MalformedResponseError.
    """
    if not text or not text.strip():
        return None
    try:
        payload = json.loads(text)
        if payload is None:
            return None
        return StructuredError.model_validate(payload)
    except ValueError as e:  # JSONDecodeError and pydantic ValidationError
        raise MalformedResponseError(text, status_code) from e


def is_retryable_status(status_code: int) -> bool:
    return status_code in RETRYABLE_STATUS_CODES


def _classify(status_code: int, text: str, calling_api: Optional[str]) -> ResponseCheck:
    error = parse_structured_error(text, status_code)
    if error is None:
        return ResponseCheck(status_code=status_code)

    message = error.message
    if calling_api is not None and error.code == "401":
        message = _UNAUTHORIZED_HINT.format(api=calling_api, message=message)

    return ResponseCheck(
        status_code=status_code,
        error=ApiError(
            error.code,
            error.status,
            message,
            is_retryable_status(status_code),
            status_code=status_code,
        ),
    )


def inspect_response(response: httpx.Response, calling_api: Optional[str] = None) -> ResponseCheck:
    if response.is_success:
        return ResponseCheck(status_code=response.status_code)
    response.read()
    return _classify(response.status_code, response.text, calling_api)


async def ainspect_response(response: httpx.Response, calling_api: Optional[str] = None) -> ResponseCheck:
    if response.is_success:
        return ResponseCheck(status_code=response.status_code)
    await response.aread()
    return _classify(response.status_code, response.text, calling_api)


def check_for_errors(response: httpx.Response, calling_api: Optional[str] = None) -> None:
    """Raise ApiError / MalformedResponseError for a failed B2 response; no-op on 2xx."""
    inspect_response(response, calling_api).raise_for_error()


async def acheck_for_errors(response: httpx.Response, calling_api: Optional[str] = None) -> None:
    (await ainspect_response(response, calling_api)).raise_for_error()
