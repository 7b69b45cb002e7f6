"""Engine bootstrapper - owns the per-engine-id initialization state machine.

ARCHITECTURE NOTE:
    Any number of components may call :meth:`EngineBootstrapper.bootstrap`
    for the same ``engine_id`` (several screens mounting at once, or one
    component re-rendering).  Exactly one of them claims the session and
    drives it through the phases; every other caller only registers its
    callback with the :class:`SessionRegistry`.

        UNINITIALIZED ──claim──→ CONFIG_PENDING ──config──→ CONSTRUCTING
                                       │                        │
                               no config│          middleware sealed,
                                       ▼          engine built,
                                 UNAVAILABLE      first dispatch
                                                         │
                                                         ▼
                                                    INITIALIZED ──→ callbacks

    Guarantee: one engine construction and one first dispatch per id.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable

import structlog

from caseassist.interfaces.search_engine import ISearchEngine
from caseassist.models.configuration import EngineConfiguration, SearchOptions
from caseassist.models.session import BootstrapPhase, EngineSession
from caseassist.pipeline.config_resolver import ConfigResolver
from caseassist.pipeline.middleware import (
    MiddlewarePipeline,
    RequestTransform,
    ResponseTransform,
    build_default_pipeline,
)
from caseassist.pipeline.session_registry import SessionRegistry
from caseassist.utils.logging import get_logger

EngineFactory = Callable[[EngineConfiguration, MiddlewarePipeline], ISearchEngine]
FirstDispatch = Callable[[ISearchEngine], object]


class EngineBootstrapper:
    """Drives engine sessions from ``UNINITIALIZED`` to ``INITIALIZED``.

    All collaborators are injected; the bootstrapper never creates the
    registry, the resolver or the engine itself.
    """

    def __init__(
        self,
        registry: SessionRegistry,
        resolver: ConfigResolver,
        engine_factory: EngineFactory,
        extra_request_transforms: Iterable[RequestTransform] = (),
        extra_response_transforms: Iterable[ResponseTransform] = (),
    ) -> None:
        self._registry = registry
        self._resolver = resolver
        self._engine_factory = engine_factory
        self._extra_request = tuple(extra_request_transforms)
        self._extra_response = tuple(extra_response_transforms)
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def registry(self) -> SessionRegistry:
        return self._registry

    async def bootstrap(
        self,
        engine_id: str,
        options: SearchOptions | None,
        on_initialized: Callable,
        first_dispatch: FirstDispatch | None = None,
    ) -> EngineSession | None:
        """Initialize *engine_id* if nobody has, then deliver the engine.

        Parameters
        ----------
        engine_id:
            The engine session to bootstrap or join.
        options:
            Search overrides applied when this call ends up constructing
            the engine; ignored when joining an existing session.
        on_initialized:
            Called with the engine once the session is initialized (right
            away when it already is).
        first_dispatch:
            Called once with the new engine during construction, before
            any ``on_initialized`` callback.  Ignored when joining.

        Returns
        -------
        EngineSession or None
            The session, or ``None`` when no configuration was available or
            construction failed; the session is then ``UNAVAILABLE``.
        """
        session = self._registry.claim(engine_id)
        if session is None:
            # Someone else owns (or already finished) this session.
            self._logger.debug(
                "bootstrap_joined_existing",
                engine_id=engine_id,
                phase=self._registry.get(engine_id).phase.value,
            )
            await self._registry.request_initialization(engine_id, on_initialized)
            return self._registry.get(engine_id)

        await self._registry.request_initialization(engine_id, on_initialized)

        try:
            engine = await self._construct(session, options, first_dispatch)
        except Exception as exc:
            self._logger.warning(
                "bootstrap_failed",
                engine_id=engine_id,
                phase=session.phase.value,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            session.engine = None
            self._registry.mark_unavailable(engine_id)
            return None
        if engine is None:
            self._registry.mark_unavailable(engine_id)
            return None

        # --- INITIALIZED ---
        await self._registry.complete(engine_id, engine, session.configuration)
        return session

    async def _construct(
        self,
        session: EngineSession,
        options: SearchOptions | None,
        first_dispatch: FirstDispatch | None,
    ) -> ISearchEngine | None:
        engine_id = session.engine_id

        # --- CONFIG_PENDING ---
        self._logger.info("bootstrap_config_pending", engine_id=engine_id)
        configuration = await self._resolver.resolve(engine_id, options)
        if configuration is None:
            return None
        session.configuration = configuration

        # --- CONSTRUCTING ---
        session.phase = BootstrapPhase.CONSTRUCTING
        middleware = build_default_pipeline(self._extra_request, self._extra_response).seal()
        session.middleware = middleware
        engine = self._engine_factory(configuration, middleware)
        session.engine = engine
        self._logger.info(
            "engine_constructed",
            engine_id=engine_id,
            middleware=[entry.name for entry in middleware.entries],
        )

        if first_dispatch is not None:
            result = first_dispatch(engine)
            if asyncio.iscoroutine(result):
                await result
            self._logger.info("first_dispatch_complete", engine_id=engine_id)
        return engine
