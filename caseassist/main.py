"""Case-assist search entry point.

Wires together the configuration provider, session registry, resolver,
bootstrapper and context composer via dependency injection, and builds
search interface controllers on top of them.  Every page (or test) builds
its own component set: the session registry is never a module global.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from caseassist.config.loader import load_config
from caseassist.config.settings import Settings
from caseassist.interfaces.browser_location import IBrowserLocation
from caseassist.interfaces.configuration_provider import IConfigurationProvider
from caseassist.interfaces.search_transport import ISearchTransport
from caseassist.interfaces.session_storage import ISessionStorage
from caseassist.models.configuration import EngineConfiguration, SearchOptions
from caseassist.pipeline.bootstrapper import EngineBootstrapper, EngineFactory
from caseassist.pipeline.config_resolver import ConfigResolver
from caseassist.pipeline.context_composer import ContextComposer
from caseassist.pipeline.middleware import MiddlewarePipeline
from caseassist.pipeline.session_registry import SessionRegistry
from caseassist.providers.browser.memory_location import MemoryLocation
from caseassist.providers.configuration.file_config_provider import FileConfigurationProvider
from caseassist.providers.configuration.http_config_provider import HttpConfigurationProvider
from caseassist.providers.engine import build_search_engine
from caseassist.providers.engine.http_transport import HttpSearchTransport
from caseassist.providers.storage.memory_session_storage import MemorySessionStorage
from caseassist.services.search_interface import SearchInterfaceController
from caseassist.utils.events import EventTarget
from caseassist.utils.logging import configure_logging

logger: structlog.BoundLogger = structlog.get_logger(logger_name=__name__)


def _build_configuration_provider(
    config: dict[str, Any],
    http_client: httpx.AsyncClient,
) -> IConfigurationProvider:
    """Pick the configuration source: HTTP endpoint first, then file."""
    source = config.get("configuration", {})
    if source.get("url"):
        return HttpConfigurationProvider(http_client=http_client, url=source["url"])
    return FileConfigurationProvider(source.get("file") or "config/engine.json")


def _build_engine_factory(transport: ISearchTransport) -> EngineFactory:
    def factory(configuration: EngineConfiguration, middleware: MiddlewarePipeline):  # noqa: ANN202
        return build_search_engine(configuration, middleware, transport)

    return factory


def build_components(
    app_settings: Settings | None = None,
    config_path: str = "config/config.yaml",
    configuration_provider: IConfigurationProvider | None = None,
    transport: ISearchTransport | None = None,
    storage: ISessionStorage | None = None,
) -> dict[str, Any]:
    """Construct the shared components for one page.

    Returns a flat dict of named components.  Any collaborator passed in
    explicitly replaces the one built from configuration.
    """
    app_settings = app_settings or Settings()
    config = load_config(config_path, app_settings)
    configure_logging(config.get("logging", {}).get("level", "INFO"))

    http_client = httpx.AsyncClient(timeout=app_settings.configuration_timeout_seconds)
    provider = configuration_provider or _build_configuration_provider(config, http_client)
    search_transport = transport or HttpSearchTransport(http_client)

    registry = SessionRegistry()
    resolver = ConfigResolver(provider, registry)
    bootstrapper = EngineBootstrapper(
        registry=registry,
        resolver=resolver,
        engine_factory=_build_engine_factory(search_transport),
    )
    session_storage = storage or MemorySessionStorage()
    composer = ContextComposer(session_storage, site_identifier=app_settings.site_identifier)

    search = config.get("search", {})
    logger.info(
        "components_built",
        configuration_provider=provider.get_provider_name(),
        search_hub=search.get("search_hub"),
    )
    return {
        "settings": app_settings,
        "config": config,
        "http_client": http_client,
        "configuration_provider": provider,
        "transport": search_transport,
        "registry": registry,
        "resolver": resolver,
        "bootstrapper": bootstrapper,
        "storage": session_storage,
        "composer": composer,
    }


def create_search_interface(
    components: dict[str, Any],
    engine_id: str,
    location: IBrowserLocation | None = None,
    events: EventTarget | None = None,
    case_data: dict[str, Any] | None = None,
) -> SearchInterfaceController:
    """Build a search interface controller from *components*."""
    app_settings: Settings = components["settings"]
    config: dict[str, Any] = components["config"]
    search = config.get("search", {})
    interface = config.get("interface", {})
    return SearchInterfaceController(
        engine_id=engine_id,
        bootstrapper=components["bootstrapper"],
        composer=components["composer"],
        location=location or MemoryLocation(),
        events=events,
        options=SearchOptions(
            search_hub=search.get("search_hub") or app_settings.search_hub,
            pipeline=search.get("pipeline") or None,
            locale=search.get("locale") or app_settings.locale,
            timezone=search.get("timezone") or app_settings.timezone,
        ),
        case_data=case_data,
        is_guest=app_settings.is_guest,
        identity_profile=app_settings.identity_profile(),
        default_query=interface.get("default_query") or app_settings.default_query,
        disable_state_in_url=bool(interface.get("disable_state_in_url")),
        skip_first_search=bool(interface.get("skip_first_search")),
    )


async def close_components(components: dict[str, Any]) -> None:
    """Release the shared HTTP client."""
    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
