"""Case-assist flow screens.

Two screens of the case creation flow attach to the same engine session as
the search interface.  Each one registers for initialization, checks its
inputs before navigating, copies input values into the case data handed
back to the flow, and logs a "next stage" analytics event.

Inputs are passed in explicitly as :class:`Validatable` collaborators;
screens do not go looking for them.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

import structlog

from caseassist.interfaces.search_engine import ISearchEngine
from caseassist.interfaces.session_storage import ISessionStorage
from caseassist.interfaces.validatable import Validatable
from caseassist.models.actions import log_case_next_stage
from caseassist.models.events import FlowEvent, FlowEventType
from caseassist.pipeline.session_registry import SessionRegistry
from caseassist.utils.logging import get_logger

PREVIOUSLY_VOTED_KEY = "idsPreviouslyVoted"
PREVIOUSLY_VOTED_POSITIVE_KEY = "idsPreviouslyVotedPositive"

NEXT_ACTION = "NEXT"
BACK_ACTION = "BACK"

_logger: structlog.BoundLogger = get_logger(__name__)


def parse_case_data(case_data: str | None) -> dict[str, Any]:
    """Parse the flow's JSON-serialized case data; malformed input gives ``{}``."""
    if not case_data:
        return {}
    try:
        parsed = json.loads(case_data)
    except json.JSONDecodeError as exc:
        _logger.warning("case_data_malformed", error=str(exc))
        return {}
    if not isinstance(parsed, dict):
        _logger.warning("case_data_malformed", error="not a JSON object")
        return {}
    return parsed


def report_validity(inputs: Sequence[Validatable]) -> bool:
    """Ask every input to report; all of them report even after a failure."""
    results = [field.report_validity() for field in inputs]
    return all(results)


class CaseAssistScreen:
    """Shared behaviour of the case-assist flow screens."""

    stage_name = ""

    def __init__(
        self,
        engine_id: str,
        registry: SessionRegistry,
        available_actions: Sequence[str] = (),
        case_data: str | None = None,
    ) -> None:
        self.engine_id = engine_id
        self._registry = registry
        self.available_actions = list(available_actions)
        self.case_data: dict[str, Any] = parse_case_data(case_data)
        self._engine: ISearchEngine | None = None
        self._logger: structlog.BoundLogger = get_logger(__name__).bind(
            engine_id=engine_id, screen=type(self).__name__
        )

    @property
    def engine(self) -> ISearchEngine | None:
        return self._engine

    async def connect(self) -> None:
        await self._registry.request_initialization(self.engine_id, self.initialize)

    def initialize(self, engine: ISearchEngine) -> None:
        if self._engine is None:
            self._engine = engine
            self._logger.debug("screen_initialized")

    def can_move_next(self, inputs: Sequence[Validatable]) -> bool:
        return NEXT_ACTION in self.available_actions and report_validity(inputs)

    def handle_next(self, inputs: Sequence[Validatable]) -> list[FlowEvent]:
        """Validate, publish the case data and move the flow forward.

        Returns the flow events to emit, or an empty list when the screen
        cannot move on.
        """
        if not self.can_move_next(inputs):
            return []
        events = self.update_flow_state(inputs)
        events.append(FlowEvent(type=FlowEventType.NAVIGATE_NEXT))
        if self._engine is not None:
            self._engine.dispatch(log_case_next_stage(self.stage_name))
        else:
            self._logger.debug("next_stage_not_logged", reason="not_initialized")
        return events

    def update_flow_state(self, inputs: Sequence[Validatable]) -> list[FlowEvent]:
        self.update_case_values(inputs)
        return [
            FlowEvent(
                type=FlowEventType.ATTRIBUTE_CHANGE,
                attribute="caseData",
                value=json.dumps(self.case_data),
            )
        ]

    def update_case_values(self, inputs: Sequence[Validatable]) -> None:
        raise NotImplementedError


class DescribeProblemScreen(CaseAssistScreen):
    """Subject + description screen.

    Changing the subject or description starts a new problem, so the
    document votes recorded for the previous one are cleared.
    """

    stage_name = "CaseAssist Describe Problem Screen"

    def __init__(
        self,
        engine_id: str,
        registry: SessionRegistry,
        storage: ISessionStorage,
        available_actions: Sequence[str] = (),
        case_data: str | None = None,
    ) -> None:
        super().__init__(engine_id, registry, available_actions, case_data)
        self._storage = storage

    def update_case_values(self, inputs: Sequence[Validatable]) -> None:
        subject, description = _by_title(inputs, "Subject"), _by_title(inputs, "Description")
        if self.case_data.get("Subject") == subject and self.case_data.get("Description") == description:
            return
        self.case_data = {"Subject": subject, "Description": description}
        self._storage.set_item(PREVIOUSLY_VOTED_KEY, json.dumps([]))
        self._storage.set_item(PREVIOUSLY_VOTED_POSITIVE_KEY, json.dumps([]))
        self._logger.info("case_problem_updated")

    def previously_voted_ids(self, positive: bool = False) -> list[str]:
        key = PREVIOUSLY_VOTED_POSITIVE_KEY if positive else PREVIOUSLY_VOTED_KEY
        raw = self._storage.get_item(key)
        if raw is None:
            return []
        try:
            ids = json.loads(raw)
        except json.JSONDecodeError as exc:
            self._logger.warning("previous_votes_malformed", key=key, error=str(exc))
            return []
        if not isinstance(ids, list):
            self._logger.warning("previous_votes_malformed", key=key, error="not a JSON array")
            return []
        return [str(item) for item in ids]


class ProvideDetailsScreen(CaseAssistScreen):
    """Classification screen (priority, reason, type, integration)."""

    stage_name = "Provide Details Screen"

    def can_move_previous(self) -> bool:
        return BACK_ACTION in self.available_actions

    def handle_previous(self, inputs: Sequence[Validatable]) -> list[FlowEvent]:
        if not self.can_move_previous():
            return []
        events = self.update_flow_state(inputs)
        events.append(FlowEvent(type=FlowEventType.NAVIGATE_BACK))
        return events

    def update_case_values(self, inputs: Sequence[Validatable]) -> None:
        for field in inputs:
            self.case_data = {**self.case_data, field.title: field.value}


def _by_title(inputs: Sequence[Validatable], title: str) -> str:
    for field in inputs:
        if field.title == title:
            return field.value
    return ""
