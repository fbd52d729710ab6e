"""Poll long-running HTTP operations until they reach a terminal state."""

from __future__ import annotations

from .clients import ServiceClient
from .config import HeaderNames, PollerSettings
from .errors import (
    DeserializationError,
    HttpError,
    InvalidPollingResponseError,
    InvalidPollingStatusCodeError,
    LongRunningOperationError,
    LroError,
    MalformedHeaderError,
    MissingBodyError,
    MissingPollingLinkError,
    MissingStatusFieldError,
    OperationCancelledError,
    OperationFailedError,
    PollTimeoutError,
    UnexpectedStatusCodeError,
)
from .http_client import HttpClient
from .models import CloudError, LroState
from .poller import LROPoller
from .polling_state import PollingState
from .strategies import PollingStrategy, PollingTarget, select_polling_target

__version__ = "0.1.0"

__all__ = [
    "CloudError",
    "DeserializationError",
    "HeaderNames",
    "HttpClient",
    "HttpError",
    "InvalidPollingResponseError",
    "InvalidPollingStatusCodeError",
    "LROPoller",
    "LongRunningOperationError",
    "LroError",
    "LroState",
    "MalformedHeaderError",
    "MissingBodyError",
    "MissingPollingLinkError",
    "MissingStatusFieldError",
    "OperationCancelledError",
    "OperationFailedError",
    "PollTimeoutError",
    "PollerSettings",
    "PollingState",
    "PollingStrategy",
    "PollingTarget",
    "ServiceClient",
    "UnexpectedStatusCodeError",
    "select_polling_target",
]
