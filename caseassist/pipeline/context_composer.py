"""Compose the context payload dispatched to the engine.

Context is assembled from prioritized layers:

    authenticated  (identity-derived, empty for guests)     lowest
    case           (subject/description of the case)
    computed       (flags derived from UI/session state)    highest

then two keys are always added on top: the site identifier and
``enableSmartSnippet``, the negation of whether the generated answer is
currently visible.  Visibility is read from session storage on every call;
nothing is cached because the toggle can flip it between two searches.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from caseassist.interfaces.session_storage import ISessionStorage
from caseassist.models.context import ContextLayer, ContextValue, LayerPriority
from caseassist.utils.logging import get_logger

GENERATED_ANSWER_STORAGE_KEY = "coveo-generated-answer-data"
SITE_CONTEXT_KEY = "website"
SMART_SNIPPET_CONTEXT_KEY = "enableSmartSnippet"


def authenticated_layer(is_guest: bool, profile: Mapping[str, ContextValue] | None = None) -> ContextLayer:
    return ContextLayer(
        name="authenticated",
        priority=LayerPriority.AUTHENTICATED,
        values={} if is_guest else dict(profile or {}),
    )


def case_layer(case_data: Mapping[str, Any] | None) -> ContextLayer:
    """Build the case layer from case fields (``Subject``, ``Description``)."""
    values: dict[str, ContextValue] = {}
    for field, key in (("Subject", "subject"), ("Description", "description")):
        value = (case_data or {}).get(field)
        if value:
            values[key] = str(value)
    return ContextLayer(name="case", priority=LayerPriority.CASE, values=values)


def computed_layer(values: Mapping[str, ContextValue] | None = None) -> ContextLayer:
    return ContextLayer(name="computed", priority=LayerPriority.COMPUTED, values=dict(values or {}))


class ContextComposer:
    """Merges context layers and the always-present computed keys."""

    def __init__(self, storage: ISessionStorage, site_identifier: str = "support") -> None:
        self._storage = storage
        self._site_identifier = site_identifier
        self._logger: structlog.BoundLogger = get_logger(__name__)

    def compose(self, layers: Iterable[ContextLayer]) -> dict[str, ContextValue]:
        """Return the union of *layers*, higher priority winning on collisions.

        ``sorted`` is stable, so layers sharing a priority apply in the
        order given.
        """
        context: dict[str, ContextValue] = {}
        for layer in sorted(layers, key=lambda layer: layer.priority):
            context.update(layer.values)
        context[SITE_CONTEXT_KEY] = self._site_identifier
        context[SMART_SNIPPET_CONTEXT_KEY] = not self.is_generated_answer_visible()
        return context

    def is_generated_answer_visible(self) -> bool:
        """Read the generated-answer visibility flag; defaults to visible."""
        raw = self._storage.get_item(GENERATED_ANSWER_STORAGE_KEY)
        if raw is None:
            return True
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            self._logger.warning(
                "generated_answer_flag_malformed",
                key=GENERATED_ANSWER_STORAGE_KEY,
                error=str(exc),
            )
            return True
        if not isinstance(data, dict) or not isinstance(data.get("isVisible"), bool):
            if data is not None:
                self._logger.warning(
                    "generated_answer_flag_malformed",
                    key=GENERATED_ANSWER_STORAGE_KEY,
                    error="missing boolean isVisible",
                )
            return True
        return data["isVisible"]
