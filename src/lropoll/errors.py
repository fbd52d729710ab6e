from __future__ import annotations

from typing import Any, Optional

import httpx


class LroError(Exception):
    """Base error for lropoll."""


class HttpError(LroError):
    def __init__(self, status_code: int, message: str, *, details: Optional[Any] = None) -> None:
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.details = details


class LongRunningOperationError(LroError):
    """Raised when a long-running operation cannot be driven to a successful result.

    Carries the initiating request and the last response received so callers can
    inspect what the service returned.
    """

    def __init__(
        self,
        message: str,
        *,
        request: Optional[httpx.Request] = None,
        response: Optional[httpx.Response] = None,
        code: Optional[str] = None,
        body: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.request = request
        self.response = response
        self.code = code
        self.body = body


class UnexpectedStatusCodeError(LongRunningOperationError):
    pass


class DeserializationError(LongRunningOperationError):
    pass


class MissingBodyError(LongRunningOperationError):
    pass


class MissingStatusFieldError(LongRunningOperationError):
    pass


class MissingPollingLinkError(LongRunningOperationError):
    pass


class InvalidPollingResponseError(LongRunningOperationError):
    pass


class InvalidPollingStatusCodeError(LongRunningOperationError):
    def __init__(self, status_code: int, message: str, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.status_code = status_code


class MalformedHeaderError(LongRunningOperationError):
    def __init__(self, header: str, value: str, **kwargs: Any) -> None:
        super().__init__(f"Header {header!r} has malformed value {value!r}", **kwargs)
        self.header = header
        self.value = value


class OperationFailedError(LongRunningOperationError):
    """Terminal non-success status reached while polling."""

    def __init__(self, message: str, *, status: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.status = status


class OperationCancelledError(LongRunningOperationError):
    pass


class PollTimeoutError(LongRunningOperationError, TimeoutError):
    """Timeout raised by :class:`~lropoll.poller.LROPoller` with last status metadata."""

    def __init__(self, timeout: float, last_status: Optional[str], **kwargs: Any) -> None:
        super().__init__(f"Operation did not complete within {timeout} seconds", **kwargs)
        self.timeout = timeout
        self.last_status = last_status
