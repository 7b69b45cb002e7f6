"""Resolve the engine configuration for an engine id.

The configuration endpoint is consulted only when no initialized session
exists for the id; otherwise the configuration the live engine was built
from is returned and nothing is fetched.  An empty or malformed payload is
not an error: the resolver logs a warning and returns ``None``, and the
bootstrapper leaves the session idle.  There is no retry.
"""

from __future__ import annotations

import json

import structlog

from caseassist.interfaces.configuration_provider import IConfigurationProvider
from caseassist.models.configuration import EngineConfiguration, SearchOptions
from caseassist.pipeline.session_registry import SessionRegistry
from caseassist.utils.errors import ProviderUnavailableError
from caseassist.utils.logging import get_logger


class ConfigResolver:
    """Fetches and parses engine configuration through a provider."""

    def __init__(
        self,
        provider: IConfigurationProvider,
        registry: SessionRegistry,
    ) -> None:
        self._provider = provider
        self._registry = registry
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def resolve(
        self,
        engine_id: str,
        options: SearchOptions | None = None,
    ) -> EngineConfiguration | None:
        """Return the configuration for *engine_id*, or ``None`` if not ready.

        Parameters
        ----------
        engine_id:
            The engine session the configuration is for.
        options:
            Search overrides (hub, pipeline, locale, timezone) merged into
            the resolved configuration.
        """
        session = self._registry.get(engine_id)
        if session is not None and session.initialized:
            self._logger.debug("configuration_reused", engine_id=engine_id)
            return session.configuration

        try:
            raw = await self._provider.fetch_configuration()
        except ProviderUnavailableError as exc:
            self._logger.warning(
                "configuration_unavailable",
                engine_id=engine_id,
                provider=self._provider.get_provider_name(),
                reason="fetch_failed",
                error=str(exc),
            )
            return None

        payload = self._parse(engine_id, raw)
        if payload is None:
            return None

        configuration = EngineConfiguration(
            payload=payload,
            search=options or SearchOptions(),
        )

        self._logger.info(
            "configuration_resolved",
            engine_id=engine_id,
            provider=self._provider.get_provider_name(),
            search_hub=configuration.search.search_hub,
        )
        return configuration

    def _parse(self, engine_id: str, raw: str | None) -> dict | None:
        if not raw or not raw.strip():
            self._logger.warning("configuration_unavailable", engine_id=engine_id, reason="empty")
            return None
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            self._logger.warning(
                "configuration_unavailable",
                engine_id=engine_id,
                reason="malformed",
                error=str(exc),
            )
            return None
        if not isinstance(payload, dict) or not payload:
            self._logger.warning(
                "configuration_unavailable",
                engine_id=engine_id,
                reason="not_an_object" if not isinstance(payload, dict) else "empty",
            )
            return None
        return payload
