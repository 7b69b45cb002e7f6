"""Search API transport over ``httpx``.

The shared ``httpx.AsyncClient`` is injected so connection pooling is
reused across sessions and tests can pass a client built on
``httpx.MockTransport``.
"""

from __future__ import annotations

import httpx
import structlog
from pydantic import ValidationError

from caseassist.interfaces.search_transport import ISearchTransport
from caseassist.models.search import SearchRequest, SearchResponse
from caseassist.utils.errors import ProviderUnavailableError

logger = structlog.get_logger(logger_name=__name__)

_PROVIDER_NAME = "search_api"


class HttpSearchTransport(ISearchTransport):
    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._client = http_client

    async def send(self, request: SearchRequest) -> SearchResponse:
        try:
            response = await self._client.request(
                request.method,
                request.url,
                content=request.body.encode("utf-8"),
                headers=request.headers,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ProviderUnavailableError(
                message=f"Search API returned HTTP {exc.response.status_code}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderUnavailableError(
                message=f"Search API request failed: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        try:
            parsed = SearchResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ProviderUnavailableError(
                message=f"Search API returned an unreadable body: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        logger.debug("search_api_response", url=request.url, results=len(parsed.results))
        return parsed
