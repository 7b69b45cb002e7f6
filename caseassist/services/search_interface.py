"""Search interface controller - the component that owns an engine session.

The controller is mounted once per engine id.  On :meth:`connect` it asks
the bootstrapper for the session; if it ends up constructing the engine,
its first-dispatch hook runs exactly once:

    1. start URL state sync (restores the query from the fragment)
    2. set_context(composed context)
    3. update_query(initial query)     - only if the fragment had none
    4. execute_search(log_interface_load)  - unless skip_first_search

A controller that joins an already initialized session, or remounts after
:meth:`disconnect`, skips those dispatches and only starts its own URL
state sync from :meth:`initialize`.

Afterwards every ``generated-answer-toggle`` event recomposes the context
and re-runs the search.  A toggle that arrives before initialization has
nothing to act on and is dropped.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from caseassist.interfaces.browser_location import IBrowserLocation
from caseassist.interfaces.live_region import ILiveRegion
from caseassist.interfaces.search_engine import ISearchEngine
from caseassist.models.actions import execute_search, log_interface_load, set_context, update_query
from caseassist.models.configuration import SearchOptions
from caseassist.models.context import ContextLayer, ContextValue
from caseassist.models.session import EngineSession
from caseassist.pipeline.aria_live_bridge import AriaLiveEventBridge
from caseassist.pipeline.bootstrapper import EngineBootstrapper
from caseassist.pipeline.context_composer import (
    ContextComposer,
    authenticated_layer,
    case_layer,
    computed_layer,
)
from caseassist.pipeline.url_sync import UrlStateSynchronizer
from caseassist.utils.events import GENERATED_ANSWER_TOGGLE, EventTarget
from caseassist.utils.logging import get_logger

DEFAULT_QUERY = "how to enhance working"


class SearchInterfaceController:
    """Bootstraps one engine session and keeps it wired to the page.

    Parameters
    ----------
    engine_id:
        The engine session this interface owns or joins.
    bootstrapper:
        Shared bootstrapper (and, through it, the session registry).
    composer:
        Builds the context payload on every trigger.
    location:
        Page location used for URL state sync.
    events:
        Event target child components dispatch into.
    options:
        Search hub / pipeline / locale / timezone overrides.
    case_data:
        Current case fields (``Subject``, ``Description``, ...).
    is_guest:
        Guests get an empty authenticated context layer.
    identity_profile:
        Identity-derived context values for authenticated users.
    default_query:
        Query used on first load when neither the URL nor the case
        provides one.
    """

    def __init__(
        self,
        engine_id: str,
        bootstrapper: EngineBootstrapper,
        composer: ContextComposer,
        location: IBrowserLocation,
        events: EventTarget | None = None,
        options: SearchOptions | None = None,
        case_data: Mapping[str, Any] | None = None,
        is_guest: bool = True,
        identity_profile: Mapping[str, ContextValue] | None = None,
        default_query: str = DEFAULT_QUERY,
        disable_state_in_url: bool = False,
        skip_first_search: bool = False,
    ) -> None:
        self.engine_id = engine_id
        self._bootstrapper = bootstrapper
        self._composer = composer
        self._location = location
        self.events = events or EventTarget()
        self._options = options or SearchOptions()
        self._case_data = dict(case_data or {})
        self._is_guest = is_guest
        self._identity_profile = dict(identity_profile or {})
        self._default_query = default_query
        self._disable_state_in_url = disable_state_in_url
        self._skip_first_search = skip_first_search

        self._engine: ISearchEngine | None = None
        self._initialized = False
        self._connected = False
        self._url_sync: UrlStateSynchronizer | None = None
        self._aria_bridge = AriaLiveEventBridge(self.events)
        self._logger: structlog.BoundLogger = get_logger(__name__).bind(engine_id=engine_id)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def engine(self) -> ISearchEngine | None:
        return self._engine

    @property
    def url_sync(self) -> UrlStateSynchronizer | None:
        return self._url_sync

    @property
    def aria_bridge(self) -> AriaLiveEventBridge:
        return self._aria_bridge

    async def connect(self) -> EngineSession | None:
        """Mount the controller: bind the toggle and bootstrap the session."""
        if not self._connected:
            self.events.add_listener(GENERATED_ANSWER_TOGGLE, self.handle_generated_answer_toggle)
            self._connected = True
        return await self._bootstrapper.bootstrap(
            self.engine_id,
            self._options,
            self.initialize,
            first_dispatch=self._first_dispatch,
        )

    def disconnect(self) -> None:
        """Unmount: release the URL sync, the toggle and the aria listeners."""
        if self._url_sync is not None:
            self._url_sync.stop()
            self._url_sync = None
        self.events.remove_listener(GENERATED_ANSWER_TOGGLE, self.handle_generated_answer_toggle)
        self._aria_bridge.unbind()
        self._connected = False
        self._logger.debug("search_interface_disconnected")

    def initialize(self, engine: ISearchEngine) -> None:
        """Bind the engine and make sure URL sync is running.

        Called for the owning controller and for controllers that mount
        later on the same engine id (including a remount of this one).
        """
        if not self._initialized:
            self._engine = engine
            self._initialized = True
            self._logger.info("search_interface_initialized")
        self._ensure_url_sync(engine)

    # ------------------------------------------------------------------
    # Context
    # ------------------------------------------------------------------

    def context_layers(self) -> list[ContextLayer]:
        return [
            authenticated_layer(self._is_guest, self._identity_profile),
            case_layer(self._case_data),
            computed_layer(),
        ]

    @property
    def context(self) -> dict[str, ContextValue]:
        return self._composer.compose(self.context_layers())

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def handle_generated_answer_toggle(self, detail: Mapping[str, Any] | None = None) -> None:
        if self._engine is None:
            self._logger.debug("generated_answer_toggle_dropped", reason="not_initialized")
            return
        context = self.context
        self._engine.dispatch(set_context(context))
        self._engine.dispatch(execute_search(log_interface_load()))
        self._logger.info(
            "generated_answer_toggled",
            enable_smart_snippet=context.get("enableSmartSnippet"),
        )

    def attach_live_region(self, region: ILiveRegion) -> None:
        """Called by the live-region child once it has mounted."""
        self._aria_bridge.attach_region(region)

    def detach_live_region(self) -> None:
        self._aria_bridge.detach_region()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _initial_query(self) -> str:
        subject = self._case_data.get("Subject")
        return str(subject) if subject else self._default_query

    def _ensure_url_sync(self, engine: ISearchEngine) -> None:
        if self._disable_state_in_url or self._url_sync is not None:
            return
        # start() restores from the fragment without searching.
        self._url_sync = UrlStateSynchronizer(engine, self._location)
        self._url_sync.start()

    def _first_dispatch(self, engine: ISearchEngine) -> None:
        # URL state goes in first so a fragment query wins over the default.
        self._ensure_url_sync(engine)

        engine.dispatch(set_context(self.context))
        if not engine.state.query:
            engine.dispatch(update_query(self._initial_query()))
        if not self._skip_first_search:
            engine.dispatch(execute_search(log_interface_load()))
        self._logger.info(
            "first_dispatch",
            query=engine.state.query,
            skip_first_search=self._skip_first_search,
        )
