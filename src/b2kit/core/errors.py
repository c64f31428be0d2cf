from __future__ import annotations
from typing import Optional


class B2Error(Exception):
    """Base class for b2kit failures."""


class ConfigurationError(B2Error, ValueError):
    """
    Non-retryable: the caller or the config left out something required
    (e.g. no bucket id with bucket persistence off). Never reaches the network.
    """


class MalformedResponseError(B2Error):
    """
    A failure response whose body could not be parsed at all.
    The parse error is chained as __cause__; raw_text carries the body.
    """

    def __init__(self, raw_text: str, status_code: Optional[int] = None):
        super().__init__(
            "Serialization of the response failed. See the cause for the parse error. "
            f"Response contents: {raw_text!r}"
        )
        self.raw_text = raw_text
        self.status_code = status_code


class ApiError(B2Error):
    """
    A structured error reported by the B2 API.
    retryable is decided from the HTTP status alone (rate limit, timeout, unavailable).
    """

    def __init__(
        self,
        code: Optional[str],
        status: Optional[str],
        message: Optional[str],
        retryable: bool,
        *,
        status_code: Optional[int] = None,
    ):
        super().__init__(message or code or "B2 API error")
        self._code = code
        self._status = status
        self._message = message
        self._retryable = bool(retryable)
        self._status_code = status_code

    @property
    def code(self) -> Optional[str]:
        return self._code

    @property
    def status(self) -> Optional[str]:
        return self._status

    @property
    def message(self) -> Optional[str]:
        return self._message

    @property
    def retryable(self) -> bool:
        return self._retryable

    @property
    def status_code(self) -> Optional[int]:
        return self._status_code

    def __repr__(self) -> str:
        return (
            f"ApiError(code={self._code!r}, status={self._status!r}, "
            f"message={self._message!r}, retryable={self._retryable})"
        )
