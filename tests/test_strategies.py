from __future__ import annotations

import pytest

from conftest import ASYNC_URL, LOCATION_URL, RESOURCE_URL, make_response
from lropoll.errors import MissingPollingLinkError
from lropoll.polling_state import PollingState
from lropoll.strategies import PollingStrategy, PollingTarget, select_polling_target


def test_async_operation_link_has_priority():
    state = PollingState(
        make_response(202, headers={"Azure-AsyncOperation": ASYNC_URL, "Location": LOCATION_URL}),
        30,
    )

    assert select_polling_target(state) == PollingTarget(PollingStrategy.ASYNC_OPERATION, ASYNC_URL)


def test_location_link_used_without_async_link():
    state = PollingState(make_response(202, method="POST", headers={"Location": LOCATION_URL}), 30)

    assert select_polling_target(state) == PollingTarget(PollingStrategy.LOCATION, LOCATION_URL)


def test_put_without_links_polls_resource():
    state = PollingState(make_response(201, json={"id": "r1"}), 30)

    assert select_polling_target(state) == PollingTarget(PollingStrategy.RESOURCE, RESOURCE_URL)


@pytest.mark.parametrize("method", ["POST", "DELETE", "PATCH"])
def test_non_put_without_links_fails(method):
    state = PollingState(make_response(202, method=method), 30)

    with pytest.raises(MissingPollingLinkError):
        select_polling_target(state)


def test_async_link_discovered_later_takes_over():
    state = PollingState(make_response(202, method="DELETE", headers={"Location": LOCATION_URL}), 30)
    state.apply_location_response(
        make_response(202, method="GET", url=LOCATION_URL, headers={"Azure-AsyncOperation": ASYNC_URL})
    )

    assert select_polling_target(state).strategy is PollingStrategy.ASYNC_OPERATION
