"""Payload models for component events and flow navigation."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AriaLiveMessage(BaseModel):
    """Detail of an ``aria-live-message`` event."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    region_name: str = Field(alias="regionName")
    message: str
    assertive: bool = False


class AriaRegionRegistration(BaseModel):
    """Detail of a ``register-aria-region`` event."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    region_name: str = Field(alias="regionName")
    assertive: bool = False


class FlowEventType(str, Enum):  # noqa: UP042
    NAVIGATE_NEXT = "NAVIGATE_NEXT"
    NAVIGATE_BACK = "NAVIGATE_BACK"
    ATTRIBUTE_CHANGE = "ATTRIBUTE_CHANGE"


class FlowEvent(BaseModel):
    """An event emitted by a case-assist screen towards the hosting flow.

    ``attribute`` and ``value`` are only set for ``ATTRIBUTE_CHANGE``.
    """

    model_config = ConfigDict(frozen=True)

    type: FlowEventType
    attribute: str | None = None
    value: str | None = None
