"""Injected registry of engine sessions keyed by engine id.

Components never look engines up through ambient globals: each one is
handed the same :class:`SessionRegistry` and registers interest in an
``engine_id`` with :meth:`SessionRegistry.request_initialization`.  The
bootstrapper that owns the session later calls :meth:`complete`, which
resolves the session exactly once and fans out to every registered
callback.

# ─── TWO-PHASE INITIALIZATION ──────────────────────────────────────────
#
#   search interface ──claim("case")──────────────→ EngineSession (owner)
#   result list      ──request_initialization()───→ pending_callbacks
#   flow screen      ──request_initialization()───→ pending_callbacks
#   bootstrapper     ──complete("case", engine)───→ callback(engine) × N
#   late component   ──request_initialization()───→ callback(engine) now
#
#   - complete() is accepted once per id; later calls are ignored
#   - callback errors are logged and isolated, the others still run
#   - sync and async callbacks are both supported
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import structlog

from caseassist.interfaces.search_engine import ISearchEngine
from caseassist.models.configuration import EngineConfiguration
from caseassist.models.session import BootstrapPhase, EngineSession
from caseassist.utils.logging import get_logger


class SessionRegistry:
    """Maps ``engine_id`` to its :class:`EngineSession`."""

    def __init__(self) -> None:
        self._sessions: dict[str, EngineSession] = {}
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, engine_id: str) -> EngineSession | None:
        return self._sessions.get(engine_id)

    def is_initialized(self, engine_id: str) -> bool:
        session = self._sessions.get(engine_id)
        return session is not None and session.initialized

    def __contains__(self, engine_id: object) -> bool:
        return engine_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def claim(self, engine_id: str) -> EngineSession | None:
        """Take ownership of the session for *engine_id* if nobody has yet.

        Returns the session moved to ``CONFIG_PENDING`` (the caller becomes
        its owner) or ``None`` when another owner already claimed it.  A
        placeholder left by an early :meth:`request_initialization` can
        still be claimed.  No ``await`` happens between the check and the
        update, so concurrent claimers on the same loop cannot both win.
        """
        session = self._sessions.get(engine_id)
        if session is None:
            session = EngineSession(engine_id=engine_id)
            self._sessions[engine_id] = session
        elif session.phase is not BootstrapPhase.UNINITIALIZED:
            return None
        session.phase = BootstrapPhase.CONFIG_PENDING
        self._logger.debug("session_claimed", engine_id=engine_id)
        return session

    async def request_initialization(self, engine_id: str, callback: Callable) -> None:
        """Register *callback* to receive the engine once it is initialized.

        If the session is already initialized the callback runs right away.
        Registering for an id nobody has claimed yet is allowed; the
        callback waits until an owner bootstraps that id.
        """
        session = self._sessions.get(engine_id)
        if session is None:
            session = EngineSession(engine_id=engine_id)
            self._sessions[engine_id] = session

        if session.initialized:
            await self._invoke(engine_id, callback, session.engine)
            return

        if callback not in session.pending_callbacks:
            session.pending_callbacks.append(callback)
            self._logger.debug(
                "initialization_requested",
                engine_id=engine_id,
                pending=len(session.pending_callbacks),
            )

    async def complete(
        self,
        engine_id: str,
        engine: ISearchEngine,
        configuration: EngineConfiguration | None = None,
    ) -> None:
        """Mark the session initialized and notify every waiting callback."""
        session = self._sessions.get(engine_id)
        if session is None:
            session = EngineSession(engine_id=engine_id)
            self._sessions[engine_id] = session
        if session.initialized:
            self._logger.debug("duplicate_completion_ignored", engine_id=engine_id)
            return

        session.engine = engine
        if configuration is not None:
            session.configuration = configuration
        session.phase = BootstrapPhase.INITIALIZED
        session.ready.set()

        callbacks, session.pending_callbacks = session.pending_callbacks, []
        self._logger.info(
            "session_initialized",
            engine_id=engine_id,
            callbacks=len(callbacks),
        )
        for callback in callbacks:
            await self._invoke(engine_id, callback, engine)

    def mark_unavailable(self, engine_id: str) -> None:
        """Record that no configuration could be resolved for *engine_id*.

        Waiting callbacks are dropped: the interface stays idle until the
        registry itself is replaced.
        """
        session = self._sessions.get(engine_id)
        if session is None:
            return
        session.phase = BootstrapPhase.UNAVAILABLE
        dropped = len(session.pending_callbacks)
        session.pending_callbacks = []
        self._logger.warning(
            "session_unavailable",
            engine_id=engine_id,
            dropped_callbacks=dropped,
        )

    async def wait_initialized(self, engine_id: str, timeout: float | None = None) -> ISearchEngine:
        """Await the engine for *engine_id*.

        Raises
        ------
        asyncio.TimeoutError
            If *timeout* elapses first.
        """
        session = self._sessions.get(engine_id)
        if session is None:
            session = EngineSession(engine_id=engine_id)
            self._sessions[engine_id] = session
        await asyncio.wait_for(session.ready.wait(), timeout=timeout)
        assert session.engine is not None
        return session.engine

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _invoke(self, engine_id: str, callback: Callable, engine: ISearchEngine | None) -> None:
        try:
            result = callback(engine)
            if asyncio.iscoroutine(result):
                await result
        except Exception as exc:
            self._logger.warning(
                "initialization_callback_error",
                engine_id=engine_id,
                error=str(exc),
                callback=getattr(callback, "__name__", repr(callback)),
            )
