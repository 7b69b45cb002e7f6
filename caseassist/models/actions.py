"""Engine actions and their factory functions.

Components never touch engine state directly: they build an
:class:`EngineAction` and hand it to ``engine.dispatch``.  Dispatch is
fire-and-forget; the engine applies actions in the order received.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ActionType(str, Enum):  # noqa: UP042
    """Kinds of action the engine dispatch surface accepts."""

    UPDATE_QUERY = "query/updateQuery"
    EXECUTE_SEARCH = "search/executeSearch"
    SET_CONTEXT = "context/set"
    LOG_INTERFACE_LOAD = "analytics/interface/load"
    LOG_CASE_NEXT_STAGE = "analytics/caseAssist/nextStage"

    @property
    def is_analytics(self) -> bool:
        return self.value.startswith("analytics/")


class EngineAction(BaseModel):
    """A single action dispatched into an engine."""

    model_config = ConfigDict(frozen=True)

    type: ActionType
    payload: dict[str, Any] = Field(default_factory=dict)


def update_query(q: str) -> EngineAction:
    return EngineAction(type=ActionType.UPDATE_QUERY, payload={"q": q})


def set_context(context: dict[str, str | bool]) -> EngineAction:
    return EngineAction(type=ActionType.SET_CONTEXT, payload={"context": dict(context)})


def log_interface_load() -> EngineAction:
    return EngineAction(type=ActionType.LOG_INTERFACE_LOAD)


def log_case_next_stage(stage_name: str) -> EngineAction:
    return EngineAction(
        type=ActionType.LOG_CASE_NEXT_STAGE,
        payload={"stageName": stage_name},
    )


def execute_search(analytics: EngineAction | None = None) -> EngineAction:
    """Build an execute-search action, optionally carrying an analytics event.

    The analytics action is logged by the engine once the search has been
    issued, mirroring how the search API attaches the cause of a query.
    """
    payload: dict[str, Any] = {}
    if analytics is not None:
        payload["analytics"] = analytics
    return EngineAction(type=ActionType.EXECUTE_SEARCH, payload=payload)
