"""Search engine runtime and its default factory.

``build_search_engine`` is the engine factory the bootstrapper calls once
per engine id, after the middleware pipeline has been sealed.  The
transport, and the ``httpx.AsyncClient`` behind it, belong to the caller
(see :func:`caseassist.main.build_components`), which also closes it.
"""

from __future__ import annotations

from caseassist.interfaces.search_transport import ISearchTransport
from caseassist.models.configuration import EngineConfiguration
from caseassist.pipeline.middleware import MiddlewarePipeline
from caseassist.providers.engine.headless_engine import HeadlessSearchEngine
from caseassist.providers.engine.http_transport import HttpSearchTransport


def build_search_engine(
    configuration: EngineConfiguration,
    middleware: MiddlewarePipeline,
    transport: ISearchTransport,
) -> HeadlessSearchEngine:
    return HeadlessSearchEngine(configuration, middleware, transport)


__all__ = ["HeadlessSearchEngine", "HttpSearchTransport", "build_search_engine"]
