"""Public interface definitions for the collaborators of the search layer.

Every external surface (configuration endpoint, search engine, search API
transport, page location, session storage, live region, flow inputs) is
reached exclusively through the abstract classes defined here.  Concrete
adapters live in ``caseassist.providers`` and ``caseassist.services`` and
are injected at construction time, so tests can pass in-memory fakes.

CONCRETE PROVIDER MAP:
    Interface                 →  Concrete implementations
    ─────────────────────────────────────────────────────────────────
    IConfigurationProvider    →  HttpConfigurationProvider,
                                 FileConfigurationProvider
    ISearchEngine             →  HeadlessSearchEngine
    ISearchTransport          →  HttpSearchTransport
    IBrowserLocation          →  MemoryLocation
    ISessionStorage           →  MemorySessionStorage
    ILiveRegion               →  AriaLiveRegion
    Validatable (Protocol)    →  provided by the hosting flow's inputs
"""

from caseassist.interfaces.browser_location import IBrowserLocation
from caseassist.interfaces.configuration_provider import IConfigurationProvider
from caseassist.interfaces.live_region import ILiveRegion
from caseassist.interfaces.search_engine import ISearchEngine
from caseassist.interfaces.search_transport import ISearchTransport
from caseassist.interfaces.session_storage import ISessionStorage
from caseassist.interfaces.validatable import Validatable

__all__ = [
    "IBrowserLocation",
    "IConfigurationProvider",
    "ILiveRegion",
    "ISearchEngine",
    "ISearchTransport",
    "ISessionStorage",
    "Validatable",
]
