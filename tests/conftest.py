from __future__ import annotations

import sys
from pathlib import Path

import httpx
import pytest
import respx


# Ensure the repository-local ``src`` directory is importable when the project is
# not installed as a package.
SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


RESOURCE_URL = "https://management.example.test/resources/r1"
ASYNC_URL = "https://management.example.test/operations/op1"
LOCATION_URL = "https://management.example.test/operationResults/op1"


def make_response(
    status: int,
    *,
    method: str = "PUT",
    url: str = RESOURCE_URL,
    json: object | None = None,
    text: str = "",
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    request = httpx.Request(method, url)
    if json is not None:
        return httpx.Response(status, json=json, headers=headers, request=request)
    return httpx.Response(status, text=text, headers=headers, request=request)


@pytest.fixture
def token_getter():
    return lambda: "dummy-token"


@pytest.fixture
def respx_mock():
    with respx.mock(assert_all_called=False) as respx_mgr:
        yield respx_mgr


@pytest.fixture
def no_sleep(monkeypatch):
    delays: list[float] = []
    monkeypatch.setattr("lropoll.poller.time.sleep", lambda delay: delays.append(delay))
    return delays
