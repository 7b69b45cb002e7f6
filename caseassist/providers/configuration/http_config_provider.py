"""Configuration provider that fetches the engine configuration over HTTP.

The endpoint returns the JSON-serialized configuration object as its body.
A 204 or an empty body yields ``None``; transport failures and non-2xx
statuses raise :class:`ProviderUnavailableError`, which the config
resolver turns into a "not ready" session.
"""

from __future__ import annotations

import httpx
import structlog

from caseassist.interfaces.configuration_provider import IConfigurationProvider
from caseassist.utils.errors import ProviderUnavailableError

logger = structlog.get_logger(logger_name=__name__)

_PROVIDER_NAME = "configuration_endpoint"


class HttpConfigurationProvider(IConfigurationProvider):
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        url: str,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._client = http_client
        self._url = url
        self._headers = headers or {}

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    async def fetch_configuration(self) -> str | None:
        try:
            response = await self._client.get(self._url, headers=self._headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ProviderUnavailableError(
                message=f"Configuration endpoint returned HTTP {exc.response.status_code}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderUnavailableError(
                message=f"Configuration request failed: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        logger.debug("configuration_fetched", url=self._url, status=response.status_code)
        if response.status_code == 204 or not response.content:
            return None
        return response.text
