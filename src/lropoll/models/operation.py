"""Typed models for long-running operation status payloads."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class LroState(str, Enum):
    """Well-known long-running operation states."""

    IN_PROGRESS = "InProgress"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    CANCELED = "Canceled"


TERMINAL_STATES = frozenset(
    {
        LroState.SUCCEEDED.value.lower(),
        LroState.FAILED.value.lower(),
        LroState.CANCELED.value.lower(),
    }
)


def is_terminal(status: str | None) -> bool:
    """Return ``True`` when ``status`` names Succeeded, Failed or Canceled."""

    return bool(status) and str(status).lower() in TERMINAL_STATES


def is_succeeded(status: str | None) -> bool:
    return bool(status) and str(status).lower() == LroState.SUCCEEDED.value.lower()


class CloudError(BaseModel):
    """Error details reported by a service for a failed operation.

    Services disagree on shapes (numeric codes, ``null`` details), so only ``code``
    and ``message`` are normalized and everything else is kept as sent.
    """

    code: str | None = None
    message: str | None = None
    target: Any = None
    details: Any = None
    innererror: Any = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @field_validator("code", "message", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> str | None:
        if value is None or value == "":
            return None
        return str(value)


__all__ = [
    "CloudError",
    "LroState",
    "TERMINAL_STATES",
    "is_succeeded",
    "is_terminal",
]
