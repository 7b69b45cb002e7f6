"""Request/response middleware installed into an engine at construction.

# ─── HOW THE MIDDLEWARE PIPELINE WORKS ─────────────────────────────────
#
#   engine ──SearchRequest──→ [T_req1 → T_req2 → ...] ──→ transport
#   engine ←─SearchResponse── [T_res1 → T_res2 → ...] ←── transport
#
#   - Transforms run in install order: apply(x) == T2(T1(x))
#   - The pipeline is sealed when the engine is built; adding a transform
#     afterwards raises MiddlewareError, so exactly the transforms present
#     at construction run for every request/response of the session
#   - Envelopes are frozen pydantic models: transforms return copies
# ──────────────────────────────────────────────────────────────────────

The two built-in transforms configure result folding on outbound search
requests and rewrite author photo URLs on inbound results.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

import structlog

from caseassist.models.search import (
    SEARCH_API_FETCH,
    SearchRequest,
    SearchResponse,
    SearchResult,
)
from caseassist.utils.errors import MiddlewareError
from caseassist.utils.logging import get_logger

RequestTransform = Callable[[SearchRequest, str], SearchRequest]
ResponseTransform = Callable[[SearchResponse], SearchResponse]

# Folding parameters forced onto outbound search requests.
FOLDING_FILTER_FIELD = "@foldingcollection"
FOLDING_PARENT_FIELD = "@foldingparent"
FOLDING_CHILD_FIELD = "@foldingchild"
FOLDED_NUMBER_OF_RESULTS = 5

PHOTO_URL_FIELD = "sfcreatedbymediumphotourl"
PHOTO_SOURCE_HOST = "https://barca.file.force.com"
PHOTO_TARGET_HOST = "https://s3.amazonaws.com/images.barca.group"
PHOTO_SIZE_TOKEN = "/M"
PHOTO_SIZE_REPLACEMENT = "_M"


class Direction(str, Enum):  # noqa: UP042
    REQUEST = "request"
    RESPONSE = "response"


@dataclass(frozen=True)
class MiddlewareEntry:
    direction: Direction
    transform: Callable
    name: str = ""


class MiddlewarePipeline:
    """Ordered request and response transforms for one engine session."""

    def __init__(self, entries: Iterable[MiddlewareEntry] = ()) -> None:
        self._entries: list[MiddlewareEntry] = []
        self._sealed = False
        self._logger: structlog.BoundLogger = get_logger(__name__)
        for entry in entries:
            self._add(entry)

    # ------------------------------------------------------------------
    # Installation
    # ------------------------------------------------------------------

    def add_request_transform(self, transform: RequestTransform, name: str = "") -> None:
        self._add(MiddlewareEntry(Direction.REQUEST, transform, name or _callable_name(transform)))

    def add_response_transform(self, transform: ResponseTransform, name: str = "") -> None:
        self._add(MiddlewareEntry(Direction.RESPONSE, transform, name or _callable_name(transform)))

    def seal(self) -> MiddlewarePipeline:
        """Freeze the pipeline; returns ``self`` for chaining."""
        self._sealed = True
        self._logger.debug(
            "middleware_sealed",
            request_transforms=len(self._of(Direction.REQUEST)),
            response_transforms=len(self._of(Direction.RESPONSE)),
        )
        return self

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def entries(self) -> tuple[MiddlewareEntry, ...]:
        return tuple(self._entries)

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------

    def apply_request(self, request: SearchRequest, client_origin: str) -> SearchRequest:
        for entry in self._of(Direction.REQUEST):
            request = entry.transform(request, client_origin)
        return request

    def apply_response(self, response: SearchResponse) -> SearchResponse:
        for entry in self._of(Direction.RESPONSE):
            response = entry.transform(response)
        return response

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _add(self, entry: MiddlewareEntry) -> None:
        if self._sealed:
            raise MiddlewareError(
                message=f"Cannot add {entry.direction.value} transform "
                f"'{entry.name}' after the engine was constructed"
            )
        self._entries.append(entry)

    def _of(self, direction: Direction) -> list[MiddlewareEntry]:
        return [entry for entry in self._entries if entry.direction is direction]


def _callable_name(transform: Callable) -> str:
    return getattr(transform, "__name__", repr(transform))


# ---------------------------------------------------------------------------
# Built-in transforms
# ---------------------------------------------------------------------------


def folding_request_transform(request: SearchRequest, client_origin: str) -> SearchRequest:
    """Force result folding on search-fetch requests.

    Only requests tagged with the search-fetch origin and not aimed at an
    HTML (quickview) endpoint are rewritten; everything else passes through.
    """
    if client_origin != SEARCH_API_FETCH or "html" in request.url:
        return request

    body = json.loads(request.body or "{}")
    body["filterField"] = FOLDING_FILTER_FIELD
    body["parentField"] = FOLDING_PARENT_FIELD
    body["childField"] = FOLDING_CHILD_FIELD
    body["numberOfResults"] = FOLDED_NUMBER_OF_RESULTS
    return request.model_copy(update={"body": json.dumps(body)})


def rewrite_photo_url(url: str) -> str:
    """Swap the file host, then the first size token.

    ``https://barca.file.force.com/foo/M/bar`` becomes
    ``https://s3.amazonaws.com/images.barca.group/foo_M/bar``.
    """
    return url.replace(PHOTO_SOURCE_HOST, PHOTO_TARGET_HOST, 1).replace(
        PHOTO_SIZE_TOKEN, PHOTO_SIZE_REPLACEMENT, 1
    )


def _rewrite_result_photo(result: SearchResult) -> SearchResult:
    update: dict = {}
    photo_url = result.raw.get(PHOTO_URL_FIELD)
    if photo_url:
        update["raw"] = {**result.raw, PHOTO_URL_FIELD: rewrite_photo_url(str(photo_url))}
    if result.child_results:
        update["child_results"] = [_rewrite_result_photo(child) for child in result.child_results]
    return result.model_copy(update=update) if update else result


def photo_url_response_transform(response: SearchResponse) -> SearchResponse:
    """Rewrite author photo URLs on every result and nested child result."""
    return response.model_copy(
        update={"results": [_rewrite_result_photo(result) for result in response.results]}
    )


def build_default_pipeline(
    extra_request: Iterable[RequestTransform] = (),
    extra_response: Iterable[ResponseTransform] = (),
) -> MiddlewarePipeline:
    """Return an unsealed pipeline with the built-in transforms first.

    Integrations append their own transforms after the built-ins; the
    bootstrapper seals the result when it constructs the engine.
    """
    pipeline = MiddlewarePipeline()
    pipeline.add_request_transform(folding_request_transform)
    for transform in extra_request:
        pipeline.add_request_transform(transform)
    pipeline.add_response_transform(photo_url_response_transform)
    for transform in extra_response:
        pipeline.add_response_transform(transform)
    return pipeline
