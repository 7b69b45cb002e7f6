"""Result template models.

A :class:`TemplateRule` pairs a :class:`ResultTemplate` with the field
conditions a result must satisfy.  A rule without conditions matches every
result and acts as the catch-all.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from caseassist.models.search import SearchResult


class FieldCondition(BaseModel):
    """Require ``result.raw[field]`` to equal one of ``values``.

    List-valued raw fields match when any element is allowed.
    """

    model_config = ConfigDict(frozen=True)

    field: str
    values: tuple[str, ...]

    def matches(self, result: SearchResult) -> bool:
        raw_value: Any = result.raw.get(self.field)
        if raw_value is None:
            return False
        candidates = raw_value if isinstance(raw_value, (list, tuple)) else [raw_value]
        return any(str(candidate) in self.values for candidate in candidates)


def field_must_match(field: str, values: list[str]) -> FieldCondition:
    return FieldCondition(field=field, values=tuple(values))


class ResultTemplate(BaseModel):
    """A named template and the raw fields it needs to render."""

    model_config = ConfigDict(frozen=True)

    name: str
    fields: tuple[str, ...] = ()


class TemplateRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    template: ResultTemplate
    conditions: tuple[FieldCondition, ...] = Field(default=())

    @property
    def is_catch_all(self) -> bool:
        return not self.conditions

    def matches(self, result: SearchResult) -> bool:
        return all(condition.matches(result) for condition in self.conditions)
