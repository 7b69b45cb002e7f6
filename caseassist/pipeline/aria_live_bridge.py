"""Route aria-live events from child components to the live region.

The live-region child announces itself with :meth:`attach_region` when it
mounts.  The first attach binds the two event listeners on the
controller's :class:`EventTarget`; later attaches (re-mounts, repeated
render passes) only swap the region reference.  Events arriving while no
region is attached are dropped: there is no queue and no error.

The bridge keeps a weak reference so a region that has been torn down
without detaching is treated as absent.
"""

from __future__ import annotations

import weakref
from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from caseassist.interfaces.live_region import ILiveRegion
from caseassist.models.events import AriaLiveMessage, AriaRegionRegistration
from caseassist.utils.events import ARIA_LIVE_MESSAGE, REGISTER_ARIA_REGION, EventTarget
from caseassist.utils.logging import get_logger


class AriaLiveEventBridge:
    def __init__(self, events: EventTarget) -> None:
        self._events = events
        self._region_ref: weakref.ReferenceType[ILiveRegion] | None = None
        self._bound = False
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def bound(self) -> bool:
        return self._bound

    @property
    def region(self) -> ILiveRegion | None:
        return self._region_ref() if self._region_ref is not None else None

    def attach_region(self, region: ILiveRegion) -> None:
        self._region_ref = weakref.ref(region)
        if not self._bound:
            self._events.add_listener(ARIA_LIVE_MESSAGE, self.handle_message)
            self._events.add_listener(REGISTER_ARIA_REGION, self.handle_register_region)
            self._bound = True
            self._logger.debug("aria_live_events_bound")

    def detach_region(self) -> None:
        self._region_ref = None

    def unbind(self) -> None:
        if not self._bound:
            return
        self._events.remove_listener(ARIA_LIVE_MESSAGE, self.handle_message)
        self._events.remove_listener(REGISTER_ARIA_REGION, self.handle_register_region)
        self._bound = False

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def handle_message(self, detail: Mapping[str, Any]) -> None:
        try:
            event = AriaLiveMessage.model_validate(detail)
        except ValidationError as exc:
            self._logger.warning("aria_live_message_malformed", error=str(exc))
            return
        region = self.region
        if region is None:
            self._logger.debug("aria_live_message_dropped", region_name=event.region_name)
            return
        region.update_message(event.region_name, event.message, event.assertive)

    def handle_register_region(self, detail: Mapping[str, Any]) -> None:
        try:
            event = AriaRegionRegistration.model_validate(detail)
        except ValidationError as exc:
            self._logger.warning("aria_region_registration_malformed", error=str(exc))
            return
        region = self.region
        if region is None:
            self._logger.debug("aria_region_registration_dropped", region_name=event.region_name)
            return
        region.register_region(event.region_name, event.assertive)
