"""Abstract base class for an accessibility live region."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ILiveRegion(ABC):
    """Announces messages to assistive technology, grouped by region name."""

    @abstractmethod
    def register_region(self, region_name: str, assertive: bool) -> None:
        """Declare a region and whether its announcements are assertive."""

    @abstractmethod
    def update_message(self, region_name: str, message: str, assertive: bool) -> None:
        """Announce *message* in *region_name*."""
