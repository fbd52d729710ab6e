"""Re-export typed models for lropoll."""

from __future__ import annotations

from .operation import (
    TERMINAL_STATES,
    CloudError,
    LroState,
    is_succeeded,
    is_terminal,
)

__all__ = [
    "CloudError",
    "LroState",
    "TERMINAL_STATES",
    "is_succeeded",
    "is_terminal",
]
