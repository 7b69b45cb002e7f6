"""Typed envelopes that cross the engine boundary.

Middleware transforms operate on these models.  Every model is frozen, so a
transform never mutates its input: it returns ``model_copy(update={...})``
and the previous envelope stays intact for the next transform or for logs.

Field aliases mirror the search API's camelCase wire format
(``childResults``, ``uniqueId``, ``totalCount``) while Python code uses the
snake_case names.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Origin tag attached to requests issued by the search-fetch path.
SEARCH_API_FETCH = "searchApiFetch"
ANALYTICS_FETCH = "analyticsFetch"


class SearchRequest(BaseModel):
    """An outbound request as seen by request middleware.

    ``body`` is the JSON-serialized request body, exactly as it will be sent.
    """

    model_config = ConfigDict(frozen=True)

    url: str
    method: str = "POST"
    body: str = "{}"
    headers: dict[str, str] = Field(default_factory=dict)


class SearchResult(BaseModel):
    """A single result, possibly carrying folded child results."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    unique_id: str = Field(default="", alias="uniqueId")
    title: str = ""
    uri: str = ""
    raw: dict[str, Any] = Field(default_factory=dict)
    child_results: list[SearchResult] = Field(default_factory=list, alias="childResults")


class SearchResponse(BaseModel):
    """An inbound search response as seen by response middleware."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    results: list[SearchResult] = Field(default_factory=list)
    total_count: int = Field(default=0, alias="totalCount")
    search_uid: str = Field(default="", alias="searchUid")


class EngineState(BaseModel):
    """Snapshot of an engine's observable state.

    Only the query parameters (``query`` through ``sort_criteria``) are
    reflected in the URL fragment; context and results are not.
    """

    model_config = ConfigDict(frozen=True)

    query: str = ""
    first_result: int = Field(default=0, ge=0)
    number_of_results: int = Field(default=10, ge=0)
    sort_criteria: str = "relevancy"
    context: dict[str, str | bool] = Field(default_factory=dict)
    results: list[SearchResult] = Field(default_factory=list)
    total_count: int = 0
    is_loading: bool = False
