from __future__ import annotations

import pytest
from pydantic import ValidationError

from lropoll.config import HeaderNames, PollerSettings


def test_defaults():
    settings = PollerSettings()

    assert settings.retry_timeout == 30
    assert settings.timeout is None
    assert settings.header_names() == HeaderNames()


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("LROPOLL_RETRY_TIMEOUT", "3")
    monkeypatch.setenv("LROPOLL_TIMEOUT", "120")
    monkeypatch.setenv("LROPOLL_ASYNC_OPERATION_HEADER", "Operation-Location")

    settings = PollerSettings()

    assert settings.retry_timeout == 3
    assert settings.timeout == 120
    assert settings.header_names().async_operation == "Operation-Location"
    assert settings.header_names().location == "Location"


def test_invalid_retry_timeout_rejected(monkeypatch):
    monkeypatch.setenv("LROPOLL_RETRY_TIMEOUT", "-1")

    with pytest.raises(ValidationError):
        PollerSettings()
