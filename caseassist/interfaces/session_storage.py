"""Abstract base class for session-scoped key/value storage."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ISessionStorage(ABC):
    """String-valued storage that lives as long as the browsing session."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored string, or ``None`` if the key is unset."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove *key* (no-op if absent)."""
