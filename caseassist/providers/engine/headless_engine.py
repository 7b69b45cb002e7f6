"""Headless search engine: the stateful runtime components dispatch into.

State updates (query, context) apply synchronously inside ``dispatch``.
Searches are scheduled as tasks that take an ``asyncio.Lock`` in dispatch
order (the lock is FIFO-fair), so two ``execute_search`` actions always hit
the transport in the order they were dispatched.  Every request and
response passes through the session's sealed :class:`MiddlewarePipeline`.

Subscribers are notified after each actual state change; applying an
action or a fragment that leaves the state as it was notifies nobody.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from typing import Any

import structlog

from caseassist.interfaces.search_engine import ISearchEngine
from caseassist.interfaces.search_transport import ISearchTransport
from caseassist.models.actions import ActionType, EngineAction
from caseassist.models.configuration import EngineConfiguration
from caseassist.models.search import SEARCH_API_FETCH, EngineState, SearchRequest
from caseassist.pipeline.middleware import MiddlewarePipeline
from caseassist.providers.engine.fragment import parse_fragment, serialize_fragment
from caseassist.utils.errors import ProviderUnavailableError
from caseassist.utils.logging import get_logger

SEARCH_PATH = "/rest/search/v2"


class HeadlessSearchEngine(ISearchEngine):
    """Search engine session backed by an :class:`ISearchTransport`."""

    def __init__(
        self,
        configuration: EngineConfiguration,
        middleware: MiddlewarePipeline,
        transport: ISearchTransport,
    ) -> None:
        self._configuration = configuration
        self._middleware = middleware
        self._transport = transport
        self._state = EngineState()
        self._listeners: list[Callable[[], None]] = []
        self._pending: set[asyncio.Task] = set()
        self._search_lock = asyncio.Lock()
        self._analytics_log: list[EngineAction] = []
        self._dispatched: list[EngineAction] = []
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # ISearchEngine implementation
    # ------------------------------------------------------------------

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def fragment(self) -> str:
        return serialize_fragment(self._state)

    @property
    def configuration(self) -> EngineConfiguration:
        return self._configuration

    @property
    def middleware(self) -> MiddlewarePipeline:
        return self._middleware

    @property
    def dispatched_actions(self) -> list[EngineAction]:
        return list(self._dispatched)

    @property
    def analytics_log(self) -> list[EngineAction]:
        return list(self._analytics_log)

    def dispatch(self, action: EngineAction) -> None:
        self._dispatched.append(action)
        if action.type is ActionType.UPDATE_QUERY:
            self._set_state(query=str(action.payload.get("q", "")))
        elif action.type is ActionType.SET_CONTEXT:
            self._set_state(context=dict(action.payload.get("context", {})))
        elif action.type is ActionType.EXECUTE_SEARCH:
            self._schedule_search(action.payload.get("analytics"))
        elif action.type.is_analytics:
            self._log_analytics(action)
        else:
            self._logger.warning("unknown_action_ignored", action_type=str(action.type))

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def synchronize(self, fragment: str, search: bool = True) -> bool:
        """Restore query parameters from *fragment* and search if they changed."""
        changed = self._set_state(**parse_fragment(fragment))
        if changed:
            self._logger.info("engine_synchronized", fragment=fragment, search=search)
            if search:
                self._schedule_search(None)
        return changed

    # ------------------------------------------------------------------
    # Search execution
    # ------------------------------------------------------------------

    async def wait_until_idle(self) -> None:
        """Await every search scheduled so far (including ones they schedule)."""
        while True:
            pending = [task for task in self._pending if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    def build_request(self) -> SearchRequest:
        """Build the outbound search request for the current state."""
        options = self._configuration.search
        body: dict[str, Any] = {
            "q": self._state.query,
            "firstResult": self._state.first_result,
            "numberOfResults": self._state.number_of_results,
            "sortCriteria": self._state.sort_criteria,
            "context": self._state.context,
            "searchHub": options.search_hub,
            "locale": options.locale,
            "timezone": options.timezone,
        }
        if options.pipeline:
            body["pipeline"] = options.pipeline
        url = f"{self._configuration.platform_url}{SEARCH_PATH}"
        if self._configuration.organization_id:
            url = f"{url}?organizationId={self._configuration.organization_id}"
        headers = {"Content-Type": "application/json"}
        if self._configuration.access_token:
            headers["Authorization"] = f"Bearer {self._configuration.access_token}"
        return SearchRequest(url=url, method="POST", body=json.dumps(body), headers=headers)

    def _schedule_search(self, analytics: EngineAction | None) -> None:
        task = asyncio.get_running_loop().create_task(self._execute_search(analytics))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _execute_search(self, analytics: EngineAction | None) -> None:
        async with self._search_lock:
            self._set_state(is_loading=True)
            try:
                request = self._middleware.apply_request(self.build_request(), SEARCH_API_FETCH)
                response = self._middleware.apply_response(await self._transport.send(request))
            except ProviderUnavailableError as exc:
                self._logger.warning("search_failed", error=str(exc), query=self._state.query)
                return
            except Exception as exc:
                # Previous results stay in place on any failure.
                self._logger.warning(
                    "search_failed",
                    error=str(exc),
                    error_type=type(exc).__name__,
                    query=self._state.query,
                )
                return
            finally:
                self._set_state(is_loading=False)

            self._set_state(results=response.results, total_count=response.total_count)
            self._logger.info(
                "search_complete",
                query=self._state.query,
                results=len(response.results),
                total_count=response.total_count,
            )
            if analytics is not None:
                self._log_analytics(analytics)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _log_analytics(self, action: EngineAction) -> None:
        self._analytics_log.append(action)
        self._logger.info("analytics_event", action_type=action.type.value, **action.payload)

    def _set_state(self, **update: Any) -> bool:
        new_state = self._state.model_copy(update=update)
        if new_state == self._state:
            return False
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener()
            except Exception as exc:
                self._logger.warning(
                    "state_listener_error",
                    error=str(exc),
                    listener=getattr(listener, "__name__", repr(listener)),
                )
        return True
