"""Unit tests for result template selection."""

from __future__ import annotations

import pytest

from caseassist.models.search import SearchResult
from caseassist.models.templates import ResultTemplate, TemplateRule, field_must_match
from caseassist.services.result_templates import (
    ResultTemplateSelector,
    default_template_rules,
    select_template,
)
from caseassist.utils.errors import ConfigurationError, TemplateRegistrationError


def _result(**raw: object) -> SearchResult:
    return SearchResult(unique_id="r1", raw=raw)


CATCH_ALL = TemplateRule(template=ResultTemplate(name="default"))
CASES = TemplateRule(
    template=ResultTemplate(name="case"),
    conditions=(field_must_match("objecttype", ["Case"]),),
)


class TestSelection:
    @pytest.fixture()
    def selector(self) -> ResultTemplateSelector:
        return ResultTemplateSelector(default_template_rules())

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ({"filetype": "YouTubeVideo", "objecttype": "Case"}, "youtube"),
            ({"objecttype": "Case"}, "case"),
            ({"objecttype": "Comment"}, "chatter"),
            ({"objecttype": "Discussion"}, "discussion"),
            ({"objecttype": "Support File"}, "support_file"),
            ({"objecttype": "KnowledgeArticle"}, "community"),
            ({}, "community"),
        ],
    )
    def test_first_matching_rule_wins(
        self,
        selector: ResultTemplateSelector,
        raw: dict[str, str],
        expected: str,
    ) -> None:
        assert selector.select(_result(**raw)).name == expected

    def test_list_valued_field_matches_any(self, selector: ResultTemplateSelector) -> None:
        assert selector.select(_result(objecttype=["Topic", "Case"])).name == "case"

    def test_fields_to_include_deduplicated(self, selector: ResultTemplateSelector) -> None:
        fields = selector.fields_to_include
        assert len(fields) == len(set(fields))
        assert "sfcreatedbymediumphotourl" in fields
        assert fields[0] == "ytvideoid"

    def test_select_template_without_catch_all(self) -> None:
        assert select_template(_result(objecttype="Comment"), [CASES]) is None


class TestRegistration:
    def test_catch_all_must_be_last(self) -> None:
        with pytest.raises(TemplateRegistrationError, match="must be declared last"):
            ResultTemplateSelector([CATCH_ALL, CASES])

    def test_catch_all_required(self) -> None:
        with pytest.raises(TemplateRegistrationError):
            ResultTemplateSelector([CASES])

    def test_single_catch_all_only(self) -> None:
        with pytest.raises(ConfigurationError):
            ResultTemplateSelector([CASES, CATCH_ALL, CATCH_ALL])

    def test_valid_rules_accepted(self) -> None:
        selector = ResultTemplateSelector([CASES, CATCH_ALL])
        assert selector.rules == (CASES, CATCH_ALL)
