"""State accumulated while polling a single long-running operation."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import DEFAULT_RETRY_TIMEOUT, HeaderNames
from .errors import (
    DeserializationError,
    InvalidPollingResponseError,
    MalformedHeaderError,
    MissingBodyError,
    MissingStatusFieldError,
    OperationFailedError,
)
from .models.operation import CloudError, LroState

logger = logging.getLogger(__name__)


def deserialize_body(response: httpx.Response, *, context: str = "polling") -> Any | None:
    """Return the JSON body of ``response`` or ``None`` when it is empty.

    Raises :class:`DeserializationError` when the body is present but is not JSON.
    """

    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise DeserializationError(
            f'Error "{exc}" occurred while parsing the response body during {context}',
            request=response.request,
            response=response,
            body=response.text,
        ) from exc


def provisioning_state(resource: Any) -> str | None:
    """Return ``resource.properties.provisioningState`` if present."""

    if not isinstance(resource, dict):
        return None
    properties = resource.get("properties")
    if not isinstance(properties, dict):
        return None
    state = properties.get("provisioningState")
    return str(state) if state else None


def as_cloud_error(error: Any) -> CloudError | None:
    """Wrap a raw ``error`` object from a response body, keeping whatever it carries."""

    if not isinstance(error, dict):
        return None
    return CloudError.model_validate(error)


def resource_error(resource: Any) -> CloudError | None:
    if not isinstance(resource, dict):
        return None
    return as_cloud_error(resource.get("error"))


def initial_status(status_code: int, resource: Any) -> str:
    """Map the initial response status code (and body) to an LRO status."""

    if status_code == 202:
        return LroState.IN_PROGRESS.value
    if status_code == 204:
        return LroState.SUCCEEDED.value
    if status_code == 201:
        return provisioning_state(resource) or LroState.IN_PROGRESS.value
    if status_code == 200:
        return provisioning_state(resource) or LroState.SUCCEEDED.value
    return LroState.FAILED.value


class StickyLink:
    """Cell holding a polling URL that empty values can never clear."""

    __slots__ = ("_value",)

    def __init__(self) -> None:
        self._value: str | None = None

    def offer(self, value: str | None) -> None:
        if value:
            self._value = value

    @property
    def value(self) -> str | None:
        return self._value

    def __bool__(self) -> bool:
        return self._value is not None


class PollingState:
    """Everything learned so far about one in-flight long-running operation.

    The state performs no I/O: the poller issues requests and feeds each response
    to one of the ``apply_*`` methods, which decide the new ``status`` and
    ``resource`` according to the polling strategy that produced the response.
    """

    def __init__(
        self,
        initial_response: httpx.Response,
        retry_timeout: int = DEFAULT_RETRY_TIMEOUT,
        *,
        header_names: HeaderNames | None = None,
    ) -> None:
        self.request: httpx.Request = initial_response.request
        self.initial_response = initial_response
        self.latest_response = initial_response
        self.header_names = header_names or HeaderNames()
        self.operation_error: CloudError | None = None
        self._retry_timeout = retry_timeout
        self._async_operation_link = StickyLink()
        self._location_link = StickyLink()

        self.update_response(initial_response)

        status_code = initial_response.status_code
        try:
            self.resource: Any | None = deserialize_body(
                initial_response, context="creation of the polling state"
            )
        except DeserializationError:
            if status_code in (200, 201):
                raise
            logger.debug("Ignoring unparseable body on initial %s response", status_code)
            self.resource = None

        self.status: str = initial_status(status_code, self.resource)

    @property
    def method(self) -> str:
        return self.request.method.upper()

    @property
    def resource_url(self) -> str:
        return str(self.request.url)

    @property
    def async_operation_link(self) -> str | None:
        return self._async_operation_link.value

    @property
    def location_link(self) -> str | None:
        return self._location_link.value

    @property
    def retry_timeout(self) -> int:
        """Seconds to wait before the next poll."""

        return self._retry_timeout

    @property
    def retry_delay_ms(self) -> int:
        return self._retry_timeout * 1000

    def update_response(self, response: httpx.Response) -> None:
        """Record ``response`` and extract polling links and retry delay from its headers."""

        self.latest_response = response
        headers = response.headers

        retry_after = headers.get(self.header_names.retry_after)
        if retry_after is not None and retry_after.strip():
            self._retry_timeout = self._parse_retry_after(retry_after, response)

        self._async_operation_link.offer(headers.get(self.header_names.async_operation))
        self._location_link.offer(headers.get(self.header_names.location))

    def _parse_retry_after(self, value: str, response: httpx.Response) -> int:
        try:
            seconds = int(value.strip())
        except ValueError:
            seconds = -1
        if seconds < 0:
            raise MalformedHeaderError(
                self.header_names.retry_after, value, request=self.request, response=response
            )
        return seconds

    def apply_async_operation_response(self, response: httpx.Response) -> None:
        """Update from a response to a GET on the async-operation link."""

        body = deserialize_body(response)
        if body is None:
            raise MissingBodyError(
                "The response from long running operation does not contain a body.",
                request=self.request,
                response=response,
            )
        if not isinstance(body, dict) or not body.get("status"):
            raise MissingStatusFieldError(
                f'The response "{body}" from long running operation does not contain the status property.',
                request=self.request,
                response=response,
                body=body,
            )
        self.update_response(response)
        self.status = str(body["status"])
        self.operation_error = as_cloud_error(body.get("error"))
        self.resource = body if self.method in ("POST", "DELETE") else None

    def apply_location_response(self, response: httpx.Response) -> None:
        """Update from a response to a GET on the location link.

        The status is decided by the status code and the initiating method only.
        """

        self.update_response(response)
        status_code = response.status_code
        method = self.method
        if status_code == 202:
            self.status = LroState.IN_PROGRESS.value
        elif (
            status_code == 200
            or (status_code == 201 and method in ("PUT", "PATCH"))
            or (status_code == 204 and method in ("DELETE", "POST"))
        ):
            self.resource = deserialize_body(response)
            self.status = LroState.SUCCEEDED.value
            self.operation_error = None
        else:
            raise InvalidPollingResponseError(
                f"The response with status code {status_code} from polling for long running "
                f'operation url "{self.location_link}" is not valid.',
                request=self.request,
                response=response,
            )

    def apply_resource_response(self, response: httpx.Response) -> None:
        """Update from a response to a GET on the resource URL."""

        body = deserialize_body(response)
        if body is None:
            raise MissingBodyError(
                "The response from long running operation does not contain a body.",
                request=self.request,
                response=response,
            )
        self.update_response(response)
        self.status = provisioning_state(body) or LroState.SUCCEEDED.value
        self.resource = body
        self.operation_error = None

    def build_terminal_error(
        self, cause: BaseException | CloudError | None = None
    ) -> OperationFailedError:
        """Return the error describing a terminal, non-successful status."""

        if cause is None:
            cause = self.operation_error
        if isinstance(cause, CloudError):
            cause_message = cause.message
        else:
            cause_message = str(cause) if cause is not None else None
        if cause_message:
            message = f"operation failed with error: {cause_message}"
        else:
            message = f"operation failed with status: {self.status}"

        code: str | None = None
        error = resource_error(self.resource)
        if error is not None:
            if error.message:
                message = f"operation failed with error: {error.message}"
            code = error.code

        return OperationFailedError(
            message,
            status=self.status,
            request=self.request,
            response=self.latest_response,
            code=code,
            body=self.resource,
        )
