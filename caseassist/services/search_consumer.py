"""Result-list consumer that attaches to an existing engine session.

The consumer never bootstraps anything: it registers interest in an engine
id and is handed the engine once the owning search interface has
initialized it.  It contributes the result template rules used to render
each result.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from caseassist.interfaces.search_engine import ISearchEngine
from caseassist.models.search import SearchResult
from caseassist.models.templates import ResultTemplate, TemplateRule
from caseassist.pipeline.session_registry import SessionRegistry
from caseassist.services.result_templates import ResultTemplateSelector, default_template_rules
from caseassist.utils.logging import get_logger


class ResultListConsumer:
    def __init__(
        self,
        engine_id: str,
        registry: SessionRegistry,
        rules: Sequence[TemplateRule] | None = None,
    ) -> None:
        self.engine_id = engine_id
        self._registry = registry
        self._selector = ResultTemplateSelector(rules if rules is not None else default_template_rules())
        self._engine: ISearchEngine | None = None
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def engine(self) -> ISearchEngine | None:
        return self._engine

    @property
    def selector(self) -> ResultTemplateSelector:
        return self._selector

    async def connect(self) -> None:
        await self._registry.request_initialization(self.engine_id, self.initialize)

    def initialize(self, engine: ISearchEngine) -> None:
        if self._engine is not None:
            return
        self._engine = engine
        self._logger.info("result_list_initialized", engine_id=self.engine_id)

    def results(self) -> list[SearchResult]:
        return list(self._engine.state.results) if self._engine is not None else []

    def template_for(self, result: SearchResult) -> ResultTemplate:
        return self._selector.select(result)
