"""Component event target with callback-based listener notification.

Child components (the generated-answer toggle, the live region, result
lists) talk to the search interface controller by dispatching named events
with a ``detail`` mapping.  The controller binds listeners on its
:class:`EventTarget` and removes them again on disconnect.

# ─── HOW COMPONENT EVENTS FLOW ─────────────────────────────────────────
#
#   GeneratedAnswer ──dispatch_event("generated-answer-toggle")──→ EventTarget
#   AriaLive user   ──dispatch_event("aria-live-message", {...})─→ EventTarget
#                                                                    │
#                                            listener(detail) ◄──────┘
#
#   - Listeners are keyed by event name; no cross-talk between names
#   - Listener errors are caught and logged, the remaining listeners run
#   - Both sync and async callbacks are supported (asyncio.iscoroutine check)
#   - Dispatching an event nobody listens to is a silent no-op
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from typing import Any

import structlog

from caseassist.utils.logging import get_logger

GENERATED_ANSWER_TOGGLE = "generated-answer-toggle"
ARIA_LIVE_MESSAGE = "aria-live-message"
REGISTER_ARIA_REGION = "register-aria-region"


class EventTarget:
    """Named-event dispatcher shared between a controller and its children."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Callable]] = {}
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def add_listener(self, event_name: str, callback: Callable) -> None:
        """Register *callback* for *event_name*.

        Registering the same callback twice for one event is ignored, so a
        component that re-binds on every render pass is only notified once.
        """
        listeners = self._listeners.setdefault(event_name, [])
        if callback not in listeners:
            listeners.append(callback)
            self._logger.debug(
                "listener_registered",
                event_name=event_name,
                total_listeners=len(listeners),
            )

    def remove_listener(self, event_name: str, callback: Callable) -> None:
        """Remove a previously registered callback (no-op if absent)."""
        listeners = self._listeners.get(event_name, [])
        if callback in listeners:
            listeners.remove(callback)
            self._logger.debug(
                "listener_unregistered",
                event_name=event_name,
                remaining_listeners=len(listeners),
            )

    def listener_count(self, event_name: str) -> int:
        return len(self._listeners.get(event_name, []))

    async def dispatch_event(
        self,
        event_name: str,
        detail: Mapping[str, Any] | None = None,
    ) -> int:
        """Invoke every listener bound to *event_name* with *detail*.

        Returns
        -------
        int
            The number of listeners that were invoked.
        """
        # Copy so listeners may unbind themselves while being notified.
        listeners = list(self._listeners.get(event_name, []))
        if not listeners:
            self._logger.debug("event_without_listeners", event_name=event_name)
            return 0

        payload = dict(detail or {})
        for callback in listeners:
            try:
                result = callback(payload)
                if asyncio.iscoroutine(result):
                    await result
            except Exception as exc:
                self._logger.warning(
                    "listener_callback_error",
                    event_name=event_name,
                    error=str(exc),
                    callback=getattr(callback, "__name__", repr(callback)),
                )
        return len(listeners)
