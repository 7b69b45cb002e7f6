"""Shared pytest fixtures for the case-assist test suite."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest

from caseassist.interfaces.configuration_provider import IConfigurationProvider
from caseassist.interfaces.search_engine import ISearchEngine
from caseassist.interfaces.search_transport import ISearchTransport
from caseassist.models.actions import ActionType, EngineAction
from caseassist.models.configuration import EngineConfiguration
from caseassist.models.search import EngineState, SearchRequest, SearchResponse, SearchResult
from caseassist.pipeline.bootstrapper import EngineBootstrapper
from caseassist.pipeline.config_resolver import ConfigResolver
from caseassist.pipeline.context_composer import ContextComposer
from caseassist.pipeline.middleware import MiddlewarePipeline, build_default_pipeline
from caseassist.pipeline.session_registry import SessionRegistry
from caseassist.providers.browser.memory_location import MemoryLocation
from caseassist.providers.engine.fragment import parse_fragment, serialize_fragment
from caseassist.providers.engine.headless_engine import HeadlessSearchEngine
from caseassist.providers.storage.memory_session_storage import MemorySessionStorage

SAMPLE_CONFIGURATION = {
    "organizationId": "barcagroupproductionkwvdy6lp",
    "accessToken": "xx-test-token",
    "platformUrl": "https://platform.cloud.coveo.com",
}


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class StaticConfigurationProvider(IConfigurationProvider):
    """Returns a fixed payload and counts fetches."""

    def __init__(self, payload: str | None) -> None:
        self.payload = payload
        self.fetch_count = 0

    def get_provider_name(self) -> str:
        return "static"

    async def fetch_configuration(self) -> str | None:
        self.fetch_count += 1
        return self.payload


class RecordingEngine(ISearchEngine):
    """Minimal engine that records dispatched actions."""

    def __init__(self) -> None:
        self.actions: list[EngineAction] = []
        self._state = EngineState()
        self._listeners: list[Callable[[], None]] = []

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def fragment(self) -> str:
        return serialize_fragment(self._state)

    def dispatch(self, action: EngineAction) -> None:
        self.actions.append(action)
        if action.type is ActionType.UPDATE_QUERY:
            self._set(query=action.payload["q"])
        elif action.type is ActionType.SET_CONTEXT:
            self._set(context=action.payload["context"])

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener) if listener in self._listeners else None

    def synchronize(self, fragment: str, search: bool = True) -> bool:
        return self._set(**parse_fragment(fragment))

    def of_type(self, action_type: ActionType) -> list[EngineAction]:
        return [action for action in self.actions if action.type is action_type]

    def _set(self, **update: Any) -> bool:
        new_state = self._state.model_copy(update=update)
        if new_state == self._state:
            return False
        self._state = new_state
        for listener in list(self._listeners):
            listener()
        return True


class RecordingEngineFactory:
    """Engine factory that counts constructions."""

    def __init__(self) -> None:
        self.engines: list[RecordingEngine] = []
        self.middlewares: list[MiddlewarePipeline] = []

    def __call__(self, configuration: EngineConfiguration, middleware: MiddlewarePipeline) -> RecordingEngine:
        engine = RecordingEngine()
        self.engines.append(engine)
        self.middlewares.append(middleware)
        return engine


class FakeTransport(ISearchTransport):
    """Records requests and answers with canned responses."""

    def __init__(self, response: SearchResponse | None = None) -> None:
        self.requests: list[SearchRequest] = []
        self.response = response or SearchResponse()

    async def send(self, request: SearchRequest) -> SearchResponse:
        self.requests.append(request)
        return self.response

    def last_body(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].body)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def configuration_json() -> str:
    return json.dumps(SAMPLE_CONFIGURATION)


@pytest.fixture
def configuration() -> EngineConfiguration:
    return EngineConfiguration(payload=SAMPLE_CONFIGURATION)


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture
def storage() -> MemorySessionStorage:
    return MemorySessionStorage()


@pytest.fixture
def location() -> MemoryLocation:
    return MemoryLocation()


@pytest.fixture
def composer(storage: MemorySessionStorage) -> ContextComposer:
    return ContextComposer(storage)


@pytest.fixture
def config_provider(configuration_json: str) -> StaticConfigurationProvider:
    return StaticConfigurationProvider(configuration_json)


@pytest.fixture
def engine_factory() -> RecordingEngineFactory:
    return RecordingEngineFactory()


@pytest.fixture
def bootstrapper(
    registry: SessionRegistry,
    config_provider: StaticConfigurationProvider,
    engine_factory: RecordingEngineFactory,
) -> EngineBootstrapper:
    return EngineBootstrapper(
        registry=registry,
        resolver=ConfigResolver(config_provider, registry),
        engine_factory=engine_factory,
    )


@pytest.fixture
def photo_result() -> SearchResult:
    return SearchResult(
        unique_id="parent",
        title="Rigging question",
        raw={
            "objecttype": "Discussion",
            "sfcreatedbymediumphotourl": "https://barca.file.force.com/profilephoto/M/abc",
        },
        child_results=[
            SearchResult(
                unique_id="child-1",
                raw={"sfcreatedbymediumphotourl": "https://barca.file.force.com/foo/M/bar"},
            ),
            SearchResult(unique_id="child-2", raw={"objecttype": "Comment"}),
        ],
    )


@pytest.fixture
def transport(photo_result: SearchResult) -> FakeTransport:
    return FakeTransport(SearchResponse(results=[photo_result], total_count=1))


@pytest.fixture
def search_engine(configuration: EngineConfiguration, transport: FakeTransport) -> HeadlessSearchEngine:
    return HeadlessSearchEngine(configuration, build_default_pipeline().seal(), transport)
