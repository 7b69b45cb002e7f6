"""Configuration provider that reads the engine configuration from disk."""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog

from caseassist.interfaces.configuration_provider import IConfigurationProvider
from caseassist.utils.errors import ProviderUnavailableError

logger = structlog.get_logger(logger_name=__name__)


class FileConfigurationProvider(IConfigurationProvider):
    """Reads a JSON file; a missing file means "no configuration"."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def get_provider_name(self) -> str:
        return "configuration_file"

    async def fetch_configuration(self) -> str | None:
        if not self._path.exists():
            logger.debug("configuration_file_missing", path=str(self._path))
            return None
        try:
            return await asyncio.to_thread(self._path.read_text, "utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ProviderUnavailableError(
                message=f"Could not read {self._path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
