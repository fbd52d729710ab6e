from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import Any, Protocol

import httpx

from .config import PollerSettings
from .errors import (
    DeserializationError,
    InvalidPollingStatusCodeError,
    OperationCancelledError,
    PollTimeoutError,
    UnexpectedStatusCodeError,
)
from .models.operation import is_succeeded, is_terminal
from .polling_state import PollingState, deserialize_body
from .strategies import apply_polling_response, select_polling_target

logger = logging.getLogger(__name__)

POLLING_STATUS_CODES = frozenset({200, 201, 202, 204})


class SupportsRequest(Protocol):
    def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        ...


def accepted_status_code(status_code: int, method: str) -> bool:
    """Return ``True`` if ``status_code`` is a legal initial response for ``method``."""

    method = method.upper()
    return (
        status_code in (200, 202)
        or (status_code == 201 and method == "PUT")
        or (status_code == 204 and method in ("DELETE", "POST"))
    )


class LROPoller:
    """Drive a long-running PUT, PATCH, POST or DELETE operation to completion.

    Each iteration waits the current retry delay, picks the async-operation link,
    the location link or the resource URL (in that order), issues one GET and
    feeds the response into the :class:`PollingState`. The loop ends on
    Succeeded, Failed or Canceled; failures raise
    :class:`~lropoll.errors.OperationFailedError`.

    Example:
        >>> poller = LROPoller(HttpClient("https://management.example.com"))
        >>> response = poller.begin("PUT", "/resources/r1", json={"location": "westus"})
    """

    def __init__(self, client: SupportsRequest, settings: PollerSettings | None = None) -> None:
        self._client = client
        self.settings = settings or PollerSettings()

    def begin(
        self,
        method: str,
        url: str,
        *,
        cancel_event: threading.Event | None = None,
        on_update: Callable[[PollingState], None] | None = None,
        **request_kwargs: Any,
    ) -> httpx.Response:
        """Send the initiating request and poll until the operation finishes."""

        initial_response = self._client.request(
            method, url, raise_for_status=False, **request_kwargs
        )
        return self.result(initial_response, cancel_event=cancel_event, on_update=on_update)

    def result(
        self,
        initial_response: httpx.Response,
        *,
        cancel_event: threading.Event | None = None,
        on_update: Callable[[PollingState], None] | None = None,
    ) -> httpx.Response:
        """Poll from ``initial_response`` and return the final response."""

        method = initial_response.request.method.upper()
        if not accepted_status_code(initial_response.status_code, method):
            raise UnexpectedStatusCodeError(
                f'Unexpected polling status code from long running operation "{initial_response.status_code}" '
                f'for method "{method}".',
                request=initial_response.request,
                response=initial_response,
            )

        state = PollingState(
            initial_response,
            self.settings.retry_timeout,
            header_names=self.settings.header_names(),
        )
        if on_update:
            on_update(state)

        start = time.time()
        while not is_terminal(state.status):
            self._wait(state, cancel_event)
            target = select_polling_target(state)
            logger.debug(
                "Polling %s %s via %s (status %s)",
                method,
                state.resource_url,
                target.strategy.value,
                state.status,
            )
            apply_polling_response(state, target, self._get_status(target.url))
            if on_update:
                on_update(state)
            timeout = self.settings.timeout
            if not is_terminal(state.status) and timeout and time.time() - start > timeout:
                raise PollTimeoutError(
                    timeout,
                    state.status,
                    request=state.request,
                    response=state.latest_response,
                    body=state.resource,
                )

        if not is_succeeded(state.status):
            raise state.build_terminal_error()

        if (state.async_operation_link or state.resource is None) and method in ("PUT", "PATCH"):
            logger.debug("Fetching final resource state from %s", state.resource_url)
            state.apply_resource_response(self._get_status(state.resource_url))
            if on_update:
                on_update(state)

        return state.latest_response

    def _wait(self, state: PollingState, cancel_event: threading.Event | None) -> None:
        delay = state.retry_delay_ms / 1000
        if cancel_event is None:
            time.sleep(delay)
            return
        if cancel_event.wait(delay):
            raise OperationCancelledError(
                "Long running operation polling was cancelled.",
                request=state.request,
                response=state.latest_response,
                body=state.resource,
            )

    def _get_status(self, operation_url: str) -> httpx.Response:
        """GET ``operation_url`` and require a polling status code."""

        request_url = operation_url.replace(" ", "%20")
        response = self._client.request("GET", request_url, raise_for_status=False)
        if response.status_code not in POLLING_STATUS_CODES:
            try:
                body = deserialize_body(response)
            except DeserializationError:
                body = response.text
            raise InvalidPollingStatusCodeError(
                response.status_code,
                f'Invalid status code with response body "{body}" occurred when polling for operation status.',
                request=response.request,
                response=response,
                body=body,
            )
        return response


__all__ = ["LROPoller", "POLLING_STATUS_CODES", "SupportsRequest", "accepted_status_code"]
