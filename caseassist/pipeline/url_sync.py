"""Bidirectional sync between engine state and the URL fragment.

# ─── THE LOOP ──────────────────────────────────────────────────────────
#
#   start():   location.fragment ──synchronize()──→ engine   (initial load)
#
#   engine state change ──fragment──→ location.replace_state("#...")
#   back/forward nav    ──hashchange──→ engine.synchronize(fragment)
#
#   Feedback guard: a hash change carrying the fragment the engine already
#   reflects (typically the one we just wrote) is ignored, and
#   engine.synchronize() is itself a no-op for such a fragment, so no extra
#   state transition is observable.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from caseassist.interfaces.browser_location import IBrowserLocation
from caseassist.interfaces.search_engine import ISearchEngine
from caseassist.utils.logging import get_logger


class UrlStateSynchronizer:
    """Keeps one engine and one page location in step."""

    def __init__(self, engine: ISearchEngine, location: IBrowserLocation) -> None:
        self._engine = engine
        self._location = location
        self._unsubscribe_engine: Callable[[], None] | None = None
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def active(self) -> bool:
        return self._unsubscribe_engine is not None

    def start(self) -> None:
        """Restore the engine from the current fragment and start syncing."""
        if self.active:
            return
        initial = self._location.fragment
        if initial:
            self._engine.synchronize(initial, search=False)
        self._unsubscribe_engine = self._engine.subscribe(self._on_engine_change)
        self._location.add_hashchange_listener(self._on_hash_change)
        self._logger.debug("url_sync_started", initial_fragment=initial)

    def stop(self) -> None:
        """Remove both the engine subscription and the hash-change listener."""
        if self._unsubscribe_engine is not None:
            self._unsubscribe_engine()
            self._unsubscribe_engine = None
        self._location.remove_hashchange_listener(self._on_hash_change)
        self._logger.debug("url_sync_stopped")

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def _on_engine_change(self) -> None:
        fragment = self._engine.fragment
        if fragment == self._location.fragment:
            return
        self._location.replace_state(f"#{fragment}")

    def _on_hash_change(self) -> None:
        fragment = self._location.fragment
        if fragment == self._engine.fragment:
            return
        changed = self._engine.synchronize(fragment)
        self._logger.debug("url_sync_hash_applied", fragment=fragment, changed=changed)
