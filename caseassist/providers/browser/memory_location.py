"""In-memory page location.

Behaves like a browser's ``window.location`` / ``history`` pair for the
fragment only: :meth:`replace_state` rewrites the current entry silently,
while :meth:`navigate`, :meth:`back` and :meth:`forward` model user or
history navigation and fire hash-change listeners.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from caseassist.interfaces.browser_location import IBrowserLocation

logger = structlog.get_logger(logger_name=__name__)


def _normalize(url_hash: str) -> str:
    if not url_hash or url_hash == "#":
        return ""
    return url_hash if url_hash.startswith("#") else f"#{url_hash}"


class MemoryLocation(IBrowserLocation):
    def __init__(self, initial_hash: str = "") -> None:
        self._history: list[str] = [_normalize(initial_hash)]
        self._index = 0
        self._listeners: list[Callable[[], None]] = []

    @property
    def hash(self) -> str:
        return self._history[self._index]

    @property
    def history_length(self) -> int:
        return len(self._history)

    def replace_state(self, url_hash: str) -> None:
        self._history[self._index] = _normalize(url_hash)

    def add_hashchange_listener(self, callback: Callable[[], None]) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_hashchange_listener(self, callback: Callable[[], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def listener_count(self) -> int:
        return len(self._listeners)

    # ------------------------------------------------------------------
    # Navigation (fires hash-change listeners)
    # ------------------------------------------------------------------

    def navigate(self, url_hash: str) -> None:
        """Push a new entry, as following an in-page link would."""
        new_hash = _normalize(url_hash)
        if new_hash == self.hash:
            return
        del self._history[self._index + 1:]
        self._history.append(new_hash)
        self._index += 1
        self._fire()

    def back(self) -> None:
        if self._index == 0:
            return
        previous = self.hash
        self._index -= 1
        if self.hash != previous:
            self._fire()

    def forward(self) -> None:
        if self._index >= len(self._history) - 1:
            return
        previous = self.hash
        self._index += 1
        if self.hash != previous:
            self._fire()

    def _fire(self) -> None:
        for callback in list(self._listeners):
            try:
                callback()
            except Exception as exc:
                logger.warning("hashchange_listener_error", error=str(exc))
