"""Service client that sends long-running requests and polls them to completion."""

from __future__ import annotations

import threading
from collections.abc import Callable
from types import TracebackType
from typing import Any

import httpx

from ..config import PollerSettings
from ..http_client import HttpClient
from ..poller import LROPoller
from ..polling_state import PollingState


class ServiceClient:
    """Client for resource-manager style APIs with long-running operations.

    Attributes:
        http: Underlying :class:`HttpClient`.
        settings: Polling settings shared by every operation sent through this client.
    """

    def __init__(
        self,
        base_url: str,
        token_getter: Callable[[], str] | None = None,
        *,
        api_version: str | None = None,
        settings: PollerSettings | None = None,
        http: HttpClient | None = None,
    ) -> None:
        self.http = http or HttpClient(base_url, token_getter=token_getter)
        self.api_version = api_version
        self.settings = settings or PollerSettings()
        self._poller = LROPoller(self.http, self.settings)

    @property
    def long_running_operation_retry_timeout(self) -> int:
        """Default seconds between polls when the service sends no Retry-After."""

        return self.settings.retry_timeout

    @long_running_operation_retry_timeout.setter
    def long_running_operation_retry_timeout(self, value: int) -> None:
        self.settings = PollerSettings.model_validate(
            {**self.settings.model_dump(), "retry_timeout": value}
        )
        self._poller.settings = self.settings

    def _with_api_version(self, extra: dict[str, Any] | None = None) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self.api_version:
            params["api-version"] = self.api_version
        if extra:
            params.update(extra)
        return params

    def send_long_running_request(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        cancel_event: threading.Event | None = None,
        on_update: Callable[[PollingState], None] | None = None,
    ) -> httpx.Response:
        """Send ``method`` to ``path`` and return the final response once the operation completes.

        Raises:
            OperationFailedError: The operation finished as Failed or Canceled.
            LongRunningOperationError: The service answered in a way that cannot be polled.
        """

        return self._poller.begin(
            method,
            path,
            params=self._with_api_version(params),
            json=json,
            headers=headers,
            cancel_event=cancel_event,
            on_update=on_update,
        )

    def get_long_running_operation_result(
        self,
        initial_response: httpx.Response,
        *,
        cancel_event: threading.Event | None = None,
        on_update: Callable[[PollingState], None] | None = None,
    ) -> httpx.Response:
        """Poll an operation whose initiating request was already sent."""

        return self._poller.result(initial_response, cancel_event=cancel_event, on_update=on_update)

    def close(self) -> None:
        """Close the underlying HTTP client."""

        self.http.close()

    def __enter__(self) -> ServiceClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
