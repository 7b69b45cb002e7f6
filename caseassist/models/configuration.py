"""Engine configuration models.

The configuration endpoint returns an opaque JSON object (organisation,
access token, platform URL, ...).  The search interface then layers its own
``search`` overrides on top before the engine is constructed.  Once an
engine has been built from an :class:`EngineConfiguration` the snapshot is
never mutated: both models are frozen.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PLATFORM_URL = "https://platform.cloud.coveo.com"


class SearchOptions(BaseModel):
    """Component-supplied overrides for the search section of the config."""

    model_config = ConfigDict(frozen=True)

    search_hub: str = "CaseAssist_GenAI"
    pipeline: str | None = None
    locale: str = "en-US"
    timezone: str = "UTC"


class EngineConfiguration(BaseModel):
    """Resolved configuration used to construct one engine session."""

    model_config = ConfigDict(frozen=True)

    # Raw payload exactly as returned by the configuration endpoint.
    payload: dict[str, Any] = Field(default_factory=dict)
    search: SearchOptions = Field(default_factory=SearchOptions)

    @property
    def organization_id(self) -> str:
        return str(self.payload.get("organizationId", ""))

    @property
    def access_token(self) -> str:
        return str(self.payload.get("accessToken", ""))

    @property
    def platform_url(self) -> str:
        return str(self.payload.get("platformUrl") or DEFAULT_PLATFORM_URL).rstrip("/")
