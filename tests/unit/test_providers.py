"""Unit tests for configuration providers, the search transport and browser fakes."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from caseassist.models.search import SearchRequest
from caseassist.providers.browser.memory_location import MemoryLocation
from caseassist.providers.configuration import FileConfigurationProvider, HttpConfigurationProvider
from caseassist.providers.engine.http_transport import HttpSearchTransport
from caseassist.utils.errors import ProviderUnavailableError
from tests.conftest import SAMPLE_CONFIGURATION


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# ======================================================================
# HttpConfigurationProvider
# ======================================================================


class TestHttpConfigurationProvider:
    @pytest.mark.asyncio
    async def test_returns_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["X-Site"] == "support"
            return httpx.Response(200, json=SAMPLE_CONFIGURATION)

        async with _client(handler) as client:
            provider = HttpConfigurationProvider(client, "https://example.test/config", {"X-Site": "support"})
            body = await provider.fetch_configuration()

        assert json.loads(body) == SAMPLE_CONFIGURATION
        assert provider.get_provider_name() == "configuration_endpoint"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [204, 200])
    async def test_empty_response_is_none(self, status: int) -> None:
        async with _client(lambda request: httpx.Response(status)) as client:
            provider = HttpConfigurationProvider(client, "https://example.test/config")
            assert await provider.fetch_configuration() is None

    @pytest.mark.asyncio
    async def test_http_error_raises(self) -> None:
        async with _client(lambda request: httpx.Response(503)) as client:
            provider = HttpConfigurationProvider(client, "https://example.test/config")
            with pytest.raises(ProviderUnavailableError) as exc_info:
                await provider.fetch_configuration()
        assert exc_info.value.provider_name == "configuration_endpoint"
        assert "503" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_connection_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as client:
            provider = HttpConfigurationProvider(client, "https://example.test/config")
            with pytest.raises(ProviderUnavailableError):
                await provider.fetch_configuration()


# ======================================================================
# FileConfigurationProvider
# ======================================================================


class TestFileConfigurationProvider:
    @pytest.mark.asyncio
    async def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "engine.json"
        path.write_text(json.dumps(SAMPLE_CONFIGURATION), encoding="utf-8")
        body = await FileConfigurationProvider(path).fetch_configuration()
        assert json.loads(body) == SAMPLE_CONFIGURATION

    @pytest.mark.asyncio
    async def test_missing_file_is_none(self, tmp_path: Path) -> None:
        assert await FileConfigurationProvider(tmp_path / "missing.json").fetch_configuration() is None

    @pytest.mark.asyncio
    async def test_invalid_utf8_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "engine.json"
        path.write_bytes(b'{"organizationId": "\xff\xfe"}')
        with pytest.raises(ProviderUnavailableError) as exc_info:
            await FileConfigurationProvider(path).fetch_configuration()
        assert exc_info.value.provider_name == "configuration_file"

    @pytest.mark.asyncio
    async def test_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ProviderUnavailableError):
            await FileConfigurationProvider(tmp_path).fetch_configuration()


# ======================================================================
# HttpSearchTransport
# ======================================================================


class TestHttpSearchTransport:
    @pytest.mark.asyncio
    async def test_posts_body_and_parses_response(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "totalCount": 1,
                    "searchUid": "uid-1",
                    "results": [
                        {
                            "uniqueId": "r1",
                            "title": "Mast",
                            "raw": {"objecttype": "Case"},
                            "childResults": [{"uniqueId": "r1-child"}],
                        }
                    ],
                },
            )

        request = SearchRequest(
            url="https://example.test/rest/search/v2",
            body=json.dumps({"q": "mast"}),
            headers={"Authorization": "Bearer t"},
        )
        async with _client(handler) as client:
            response = await HttpSearchTransport(client).send(request)

        assert seen[0].method == "POST"
        assert json.loads(seen[0].content) == {"q": "mast"}
        assert seen[0].headers["Authorization"] == "Bearer t"
        assert response.total_count == 1
        assert response.search_uid == "uid-1"
        assert response.results[0].child_results[0].unique_id == "r1-child"

    @pytest.mark.asyncio
    async def test_unreadable_body_raises(self) -> None:
        async with _client(lambda request: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(ProviderUnavailableError) as exc_info:
                await HttpSearchTransport(client).send(SearchRequest(url="https://example.test/s"))
        assert exc_info.value.provider_name == "search_api"

    @pytest.mark.asyncio
    async def test_status_error_raises(self) -> None:
        async with _client(lambda request: httpx.Response(401)) as client:
            with pytest.raises(ProviderUnavailableError, match="HTTP 401"):
                await HttpSearchTransport(client).send(SearchRequest(url="https://example.test/s"))


# ======================================================================
# MemoryLocation
# ======================================================================


class TestMemoryLocation:
    def test_replace_state_is_silent(self) -> None:
        location = MemoryLocation("#q=a")
        fired: list[None] = []
        location.add_hashchange_listener(lambda: fired.append(None))
        location.replace_state("#q=b")
        assert location.hash == "#q=b"
        assert location.fragment == "q=b"
        assert fired == []
        assert location.history_length == 1

    def test_navigation_fires_listeners(self) -> None:
        location = MemoryLocation()
        fired: list[str] = []
        location.add_hashchange_listener(lambda: fired.append(location.hash))
        location.navigate("q=a")
        location.navigate("#q=b")
        location.back()
        location.forward()
        location.forward()
        assert fired == ["#q=a", "#q=b", "#q=a", "#q=b"]

    def test_navigate_truncates_forward_history(self) -> None:
        location = MemoryLocation()
        location.navigate("#q=a")
        location.navigate("#q=b")
        location.back()
        location.navigate("#q=c")
        assert location.history_length == 3
        location.forward()
        assert location.hash == "#q=c"
