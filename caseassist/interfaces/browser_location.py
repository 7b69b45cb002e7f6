"""Abstract base class for the page location (URL fragment) surface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable


class IBrowserLocation(ABC):
    """Read/replace the URL fragment and observe external hash changes."""

    @property
    @abstractmethod
    def hash(self) -> str:
        """Return the current fragment including the leading ``#`` (or ``""``)."""

    @property
    def fragment(self) -> str:
        """Return the fragment without its leading ``#``."""
        return self.hash[1:] if self.hash.startswith("#") else self.hash

    @abstractmethod
    def replace_state(self, url_hash: str) -> None:
        """Replace the current history entry's fragment.

        Never adds a history entry and never fires hash-change listeners.
        """

    @abstractmethod
    def add_hashchange_listener(self, callback: Callable[[], None]) -> None:
        """Register *callback* for externally triggered hash changes."""

    @abstractmethod
    def remove_hashchange_listener(self, callback: Callable[[], None]) -> None:
        """Remove a hash-change callback (no-op if absent)."""
