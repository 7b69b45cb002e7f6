"""Result template selection.

Rules are evaluated in declaration order and the first match wins.  The
catch-all rule (no conditions) matches everything, so it must be declared
exactly once and last; :class:`ResultTemplateSelector` rejects any other
arrangement at registration time instead of silently shadowing rules.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from caseassist.models.search import SearchResult
from caseassist.models.templates import ResultTemplate, TemplateRule, field_must_match
from caseassist.utils.errors import TemplateRegistrationError
from caseassist.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


def select_template(result: SearchResult, rules: Sequence[TemplateRule]) -> ResultTemplate | None:
    """Return the template of the first rule matching *result*."""
    for rule in rules:
        if rule.matches(result):
            return rule.template
    return None


def validate_rules(rules: Sequence[TemplateRule]) -> None:
    """Raise :class:`TemplateRegistrationError` unless exactly one catch-all closes the list."""
    catch_all = [index for index, rule in enumerate(rules) if rule.is_catch_all]
    if len(catch_all) != 1:
        raise TemplateRegistrationError(
            message=f"Expected exactly one catch-all template rule, found {len(catch_all)}"
        )
    if catch_all[0] != len(rules) - 1:
        shadowed = [rule.template.name for rule in rules[catch_all[0] + 1:]]
        raise TemplateRegistrationError(
            message=f"Catch-all template '{rules[catch_all[0]].template.name}' "
            f"must be declared last; it would shadow {shadowed}"
        )


class ResultTemplateSelector:
    def __init__(self, rules: Sequence[TemplateRule]) -> None:
        validate_rules(rules)
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[TemplateRule, ...]:
        return self._rules

    @property
    def fields_to_include(self) -> list[str]:
        """Every raw field any registered template needs, in first-seen order."""
        fields: list[str] = []
        for rule in self._rules:
            for field in rule.template.fields:
                if field not in fields:
                    fields.append(field)
        return fields

    def select(self, result: SearchResult) -> ResultTemplate:
        template = select_template(result, self._rules)
        # validate_rules guarantees a catch-all, so a match always exists.
        assert template is not None
        _logger.debug("template_selected", unique_id=result.unique_id, template=template.name)
        return template


def default_template_rules() -> list[TemplateRule]:
    """The case-assist result templates, most specific first."""
    return [
        TemplateRule(
            template=ResultTemplate(
                name="youtube",
                fields=("ytvideoid", "ytvideoduration", "ytviewcount"),
            ),
            conditions=(field_must_match("filetype", ["YouTubeVideo"]),),
        ),
        TemplateRule(
            template=ResultTemplate(
                name="case",
                fields=("sfstatus", "sfcasestatus", "sfcasenumber", "foldingcollection", "sfid"),
            ),
            conditions=(field_must_match("objecttype", ["Case"]),),
        ),
        TemplateRule(
            template=ResultTemplate(
                name="chatter",
                fields=("sfcreatedby", "sfcreatedbymediumphotourl", "filetype", "objecttype", "sfcommentbody"),
            ),
            conditions=(field_must_match("objecttype", ["Comment"]),),
        ),
        TemplateRule(
            template=ResultTemplate(
                name="discussion",
                fields=(
                    "sfcreatedby",
                    "sfcreatedbymediumphotourl",
                    "filetype",
                    "objecttype",
                    "sffeedcommentscommentbody",
                    "sfcommentcount",
                ),
            ),
            conditions=(field_must_match("objecttype", ["Discussion"]),),
        ),
        TemplateRule(
            template=ResultTemplate(
                name="support_file",
                fields=("barca_brand", "sftopicassignmentstopicid"),
            ),
            conditions=(field_must_match("objecttype", ["Support File"]),),
        ),
        TemplateRule(
            template=ResultTemplate(
                name="community",
                fields=("barca_brand", "sftopicassignmentstopicid"),
            ),
        ),
    ]
