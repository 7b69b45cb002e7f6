"""Unit tests for the engine bootstrapper state machine."""

from __future__ import annotations

import asyncio

import pytest

from caseassist.models.configuration import SearchOptions
from caseassist.models.search import SearchResponse
from caseassist.models.session import BootstrapPhase
from caseassist.pipeline.bootstrapper import EngineBootstrapper
from caseassist.pipeline.config_resolver import ConfigResolver
from caseassist.pipeline.session_registry import SessionRegistry
from caseassist.providers.configuration import FileConfigurationProvider
from tests.conftest import RecordingEngineFactory, StaticConfigurationProvider


class BrokenConfigurationProvider(StaticConfigurationProvider):
    """Fails with an error the provider did not translate."""

    def __init__(self) -> None:
        super().__init__(None)

    async def fetch_configuration(self) -> str | None:
        raise ValueError("unexpected payload encoding")


class TestSingleConstruction:
    @pytest.mark.asyncio
    async def test_sequential_calls_construct_once(
        self,
        bootstrapper: EngineBootstrapper,
        engine_factory: RecordingEngineFactory,
        config_provider: StaticConfigurationProvider,
    ) -> None:
        first_dispatches: list[object] = []
        initialized: list[object] = []

        for _ in range(3):
            await bootstrapper.bootstrap(
                "case",
                SearchOptions(),
                initialized.append,
                first_dispatch=first_dispatches.append,
            )

        assert len(engine_factory.engines) == 1
        assert len(first_dispatches) == 1
        assert config_provider.fetch_count == 1
        # Bound-method callbacks compare equal, so the first registration
        # is notified on completion and the joins run immediately.
        assert initialized == [engine_factory.engines[0]] * 3

    @pytest.mark.asyncio
    async def test_concurrent_calls_construct_once(
        self,
        bootstrapper: EngineBootstrapper,
        engine_factory: RecordingEngineFactory,
        registry: SessionRegistry,
    ) -> None:
        first_dispatches: list[object] = []
        received: dict[int, object] = {}

        def make_callback(index: int):
            def callback(engine: object) -> None:
                received[index] = engine

            return callback

        await asyncio.gather(
            *(
                bootstrapper.bootstrap(
                    "case",
                    None,
                    make_callback(i),
                    first_dispatch=first_dispatches.append,
                )
                for i in range(5)
            )
        )

        assert len(engine_factory.engines) == 1
        assert len(first_dispatches) == 1
        engine = engine_factory.engines[0]
        assert received == {i: engine for i in range(5)}
        assert registry.get("case").phase is BootstrapPhase.INITIALIZED

    @pytest.mark.asyncio
    async def test_first_dispatch_precedes_callbacks(self, bootstrapper: EngineBootstrapper) -> None:
        order: list[str] = []
        await bootstrapper.bootstrap(
            "case",
            None,
            lambda engine: order.append("initialized"),
            first_dispatch=lambda engine: order.append("first_dispatch"),
        )
        assert order == ["first_dispatch", "initialized"]

    @pytest.mark.asyncio
    async def test_async_first_dispatch_awaited(self, bootstrapper: EngineBootstrapper) -> None:
        order: list[str] = []

        async def first_dispatch(engine: object) -> None:
            await asyncio.sleep(0)
            order.append("first_dispatch")

        await bootstrapper.bootstrap("case", None, lambda engine: order.append("initialized"), first_dispatch)
        assert order == ["first_dispatch", "initialized"]


class TestMiddlewareInstallation:
    @pytest.mark.asyncio
    async def test_engine_receives_sealed_pipeline(
        self,
        bootstrapper: EngineBootstrapper,
        engine_factory: RecordingEngineFactory,
    ) -> None:
        session = await bootstrapper.bootstrap("case", None, lambda engine: None)
        middleware = engine_factory.middlewares[0]
        assert middleware.sealed
        assert session.middleware is middleware
        assert [entry.name for entry in middleware.entries] == [
            "folding_request_transform",
            "photo_url_response_transform",
        ]

    @pytest.mark.asyncio
    async def test_extra_transforms_follow_builtins(
        self,
        registry: SessionRegistry,
        config_provider: StaticConfigurationProvider,
        engine_factory: RecordingEngineFactory,
    ) -> None:
        def tag_response(response: SearchResponse) -> SearchResponse:
            return response

        bootstrapper = EngineBootstrapper(
            registry=registry,
            resolver=ConfigResolver(config_provider, registry),
            engine_factory=engine_factory,
            extra_response_transforms=[tag_response],
        )
        await bootstrapper.bootstrap("case", None, lambda engine: None)
        names = [entry.name for entry in engine_factory.middlewares[0].entries]
        assert names[-1] == "tag_response"


class TestConfigurationUnavailable:
    @pytest.mark.parametrize("payload", [None, "", "{}", "not json", "[1, 2]"])
    @pytest.mark.asyncio
    async def test_no_engine_without_configuration(
        self,
        payload: str | None,
        registry: SessionRegistry,
        engine_factory: RecordingEngineFactory,
    ) -> None:
        bootstrapper = EngineBootstrapper(
            registry=registry,
            resolver=ConfigResolver(StaticConfigurationProvider(payload), registry),
            engine_factory=engine_factory,
        )
        initialized: list[object] = []
        first_dispatches: list[object] = []

        result = await bootstrapper.bootstrap("case", None, initialized.append, first_dispatches.append)

        assert result is None
        assert engine_factory.engines == []
        assert initialized == []
        assert first_dispatches == []
        assert registry.get("case").phase is BootstrapPhase.UNAVAILABLE

    @pytest.mark.asyncio
    async def test_unavailable_session_stays_idle(
        self,
        registry: SessionRegistry,
        engine_factory: RecordingEngineFactory,
    ) -> None:
        provider = StaticConfigurationProvider("")
        bootstrapper = EngineBootstrapper(
            registry=registry,
            resolver=ConfigResolver(provider, registry),
            engine_factory=engine_factory,
        )
        await bootstrapper.bootstrap("case", None, lambda engine: None)
        await bootstrapper.bootstrap("case", None, lambda engine: None)

        assert provider.fetch_count == 1
        assert engine_factory.engines == []


class TestSessionConfiguration:
    @pytest.mark.asyncio
    async def test_options_carried_into_configuration(self, bootstrapper: EngineBootstrapper) -> None:
        options = SearchOptions(search_hub="Community", pipeline="cases", locale="fr-CA")
        session = await bootstrapper.bootstrap("case", options, lambda engine: None)
        assert session.configuration.search == options
        assert session.configuration.organization_id == "barcagroupproductionkwvdy6lp"


class TestConstructionFailure:
    @pytest.mark.asyncio
    async def test_unreadable_configuration_file(
        self,
        tmp_path,
        registry: SessionRegistry,
        engine_factory: RecordingEngineFactory,
    ) -> None:
        path = tmp_path / "engine.json"
        path.write_bytes(b'{"organizationId": "\xff\xfe"}')
        bootstrapper = EngineBootstrapper(
            registry=registry,
            resolver=ConfigResolver(FileConfigurationProvider(path), registry),
            engine_factory=engine_factory,
        )

        assert await bootstrapper.bootstrap("case", None, lambda engine: None) is None
        assert registry.get("case").phase is BootstrapPhase.UNAVAILABLE
        assert engine_factory.engines == []

    @pytest.mark.asyncio
    async def test_resolver_error_marks_unavailable(
        self,
        registry: SessionRegistry,
        engine_factory: RecordingEngineFactory,
    ) -> None:
        bootstrapper = EngineBootstrapper(
            registry=registry,
            resolver=ConfigResolver(BrokenConfigurationProvider(), registry),
            engine_factory=engine_factory,
        )
        initialized: list[object] = []

        assert await bootstrapper.bootstrap("case", None, initialized.append) is None
        assert registry.get("case").phase is BootstrapPhase.UNAVAILABLE
        assert registry.get("case").pending_callbacks == []
        assert initialized == []

    @pytest.mark.asyncio
    async def test_factory_error_marks_unavailable(
        self,
        registry: SessionRegistry,
        config_provider: StaticConfigurationProvider,
    ) -> None:
        def broken_factory(configuration, middleware):
            raise RuntimeError("engine refused configuration")

        bootstrapper = EngineBootstrapper(
            registry=registry,
            resolver=ConfigResolver(config_provider, registry),
            engine_factory=broken_factory,
        )

        assert await bootstrapper.bootstrap("case", None, lambda engine: None) is None
        session = registry.get("case")
        assert session.phase is BootstrapPhase.UNAVAILABLE
        assert session.engine is None

    @pytest.mark.asyncio
    async def test_first_dispatch_error_marks_unavailable(
        self,
        bootstrapper: EngineBootstrapper,
        registry: SessionRegistry,
    ) -> None:
        async def broken_first_dispatch(engine: object) -> None:
            raise KeyError("Subject")

        initialized: list[object] = []
        result = await bootstrapper.bootstrap("case", None, initialized.append, broken_first_dispatch)

        assert result is None
        assert initialized == []
        assert registry.get("case").phase is BootstrapPhase.UNAVAILABLE
        assert registry.get("case").engine is None
