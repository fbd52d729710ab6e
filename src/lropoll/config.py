"""Runtime settings for long-running operation polling."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RETRY_TIMEOUT = 30


@dataclass(frozen=True)
class HeaderNames:
    """Response header names consulted while polling.

    Lookups are case-insensitive because they go through ``httpx.Headers``.
    """

    async_operation: str = "Azure-AsyncOperation"
    location: str = "Location"
    retry_after: str = "Retry-After"


class PollerSettings(BaseSettings):
    """Polling settings exposed via ``LROPOLL_*`` environment variables."""

    retry_timeout: int = Field(
        default=DEFAULT_RETRY_TIMEOUT,
        ge=0,
        description="Seconds to wait between polls until a Retry-After header says otherwise",
    )
    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Give up after this many seconds; unbounded when unset",
    )
    async_operation_header: str = "Azure-AsyncOperation"
    location_header: str = "Location"
    retry_after_header: str = "Retry-After"

    model_config = SettingsConfigDict(env_prefix="LROPOLL_", extra="ignore")

    def header_names(self) -> HeaderNames:
        return HeaderNames(
            async_operation=self.async_operation_header,
            location=self.location_header,
            retry_after=self.retry_after_header,
        )
