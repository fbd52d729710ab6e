"""Choose which URL to poll next for a long-running operation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import httpx

from .errors import MissingPollingLinkError
from .polling_state import PollingState


class PollingStrategy(str, Enum):
    """How the next poll's response is interpreted."""

    ASYNC_OPERATION = "async-operation"
    LOCATION = "location"
    RESOURCE = "resource"


@dataclass(frozen=True)
class PollingTarget:
    strategy: PollingStrategy
    url: str


def select_polling_target(state: PollingState) -> PollingTarget:
    """Return the next polling target for ``state``.

    Priority is the async-operation link, then the location link, then a GET on the
    original resource URL when the operation was started by a PUT.
    """

    if state.async_operation_link:
        return PollingTarget(PollingStrategy.ASYNC_OPERATION, state.async_operation_link)
    if state.location_link:
        return PollingTarget(PollingStrategy.LOCATION, state.location_link)
    if state.method == "PUT":
        return PollingTarget(PollingStrategy.RESOURCE, state.resource_url)
    raise MissingPollingLinkError(
        "Location header is missing from long running operation and method is not PUT.",
        request=state.request,
        response=state.latest_response,
    )


def apply_polling_response(
    state: PollingState, target: PollingTarget, response: httpx.Response
) -> None:
    """Feed ``response`` into ``state`` using the update rule for ``target``."""

    if target.strategy is PollingStrategy.ASYNC_OPERATION:
        state.apply_async_operation_response(response)
    elif target.strategy is PollingStrategy.LOCATION:
        state.apply_location_response(response)
    else:
        state.apply_resource_response(response)
