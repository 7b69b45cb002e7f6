"""URL-fragment codec for engine query parameters.

Only parameters that differ from their defaults are written, in a fixed
order, so the same state always serializes to the same fragment:

    q=printer%20jam&firstResult=10&sortCriteria=date%20descending

Unknown keys and unparsable numbers are ignored on the way back in.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qsl, quote, urlencode

from caseassist.models.search import EngineState

_DEFAULTS = EngineState()

# (fragment key, EngineState attribute, parser)
_PARAMETERS: tuple[tuple[str, str, type], ...] = (
    ("q", "query", str),
    ("firstResult", "first_result", int),
    ("numberOfResults", "number_of_results", int),
    ("sortCriteria", "sort_criteria", str),
)


def serialize_fragment(state: EngineState) -> str:
    pairs = [
        (key, str(getattr(state, attribute)))
        for key, attribute, _ in _PARAMETERS
        if getattr(state, attribute) != getattr(_DEFAULTS, attribute)
    ]
    return urlencode(pairs, quote_via=quote)


def parse_fragment(fragment: str) -> dict[str, Any]:
    """Return the EngineState fields described by *fragment*.

    Parameters missing from the fragment are reset to their defaults, so
    navigating back to an empty fragment restores the initial query state.
    """
    values = dict(parse_qsl(fragment.lstrip("#"), keep_blank_values=True))
    update: dict[str, Any] = {}
    for key, attribute, parser in _PARAMETERS:
        default = getattr(_DEFAULTS, attribute)
        raw = values.get(key)
        if raw is None:
            update[attribute] = default
            continue
        try:
            parsed = parser(raw)
        except ValueError:
            parsed = default
        if isinstance(parsed, int) and parsed < 0:
            parsed = default
        update[attribute] = parsed
    return update
