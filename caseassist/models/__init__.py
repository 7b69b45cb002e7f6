"""Domain models for the case-assist search layer.

The models are organized by concern:
    - actions.py        - engine actions and their factories
    - configuration.py  - resolved engine configuration + search overrides
    - context.py        - prioritized context layers
    - events.py         - component event payloads and flow events
    - search.py         - request/response envelopes and engine state
    - session.py        - per-engine-id session lifecycle
    - templates.py      - result template rules
"""

from __future__ import annotations

from caseassist.models.actions import (
    ActionType,
    EngineAction,
    execute_search,
    log_case_next_stage,
    log_interface_load,
    set_context,
    update_query,
)
from caseassist.models.configuration import EngineConfiguration, SearchOptions
from caseassist.models.context import ContextLayer, ContextValue, LayerPriority
from caseassist.models.events import (
    AriaLiveMessage,
    AriaRegionRegistration,
    FlowEvent,
    FlowEventType,
)
from caseassist.models.search import (
    SEARCH_API_FETCH,
    EngineState,
    SearchRequest,
    SearchResponse,
    SearchResult,
)
from caseassist.models.session import BootstrapPhase, EngineSession
from caseassist.models.templates import (
    FieldCondition,
    ResultTemplate,
    TemplateRule,
    field_must_match,
)

__all__ = [
    "ActionType",
    "AriaLiveMessage",
    "AriaRegionRegistration",
    "BootstrapPhase",
    "ContextLayer",
    "ContextValue",
    "EngineAction",
    "EngineConfiguration",
    "EngineSession",
    "EngineState",
    "FieldCondition",
    "FlowEvent",
    "FlowEventType",
    "LayerPriority",
    "ResultTemplate",
    "SEARCH_API_FETCH",
    "SearchOptions",
    "SearchRequest",
    "SearchResponse",
    "SearchResult",
    "TemplateRule",
    "execute_search",
    "field_must_match",
    "log_case_next_stage",
    "log_interface_load",
    "set_context",
    "update_query",
]
