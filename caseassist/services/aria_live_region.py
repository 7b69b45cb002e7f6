"""Live region component that announces messages to assistive technology.

Each named region is registered once with its assertiveness; messages are
kept per region so a renderer can expose them through ``aria-live``
containers (``polite`` or ``assertive``).
"""

from __future__ import annotations

import structlog

from caseassist.interfaces.live_region import ILiveRegion
from caseassist.utils.logging import get_logger


class AriaLiveRegion(ILiveRegion):
    def __init__(self) -> None:
        # AriaLiveRegistration: region name -> assertive flag
        self._regions: dict[str, bool] = {}
        self._messages: dict[str, str] = {}
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def regions(self) -> dict[str, bool]:
        return dict(self._regions)

    def register_region(self, region_name: str, assertive: bool) -> None:
        self._regions[region_name] = assertive
        self._messages.setdefault(region_name, "")

    def update_message(self, region_name: str, message: str, assertive: bool) -> None:
        # An unregistered region is registered on its first message.
        if region_name not in self._regions:
            self._regions[region_name] = assertive
        self._messages[region_name] = message
        self._logger.debug(
            "aria_live_announcement",
            region_name=region_name,
            politeness=self.politeness(region_name),
        )

    def message(self, region_name: str) -> str:
        return self._messages.get(region_name, "")

    def politeness(self, region_name: str) -> str:
        return "assertive" if self._regions.get(region_name) else "polite"
