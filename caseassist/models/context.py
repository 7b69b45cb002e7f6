"""Context layer models.

A context layer is a named set of key/value metadata describing the user or
the task at hand.  Layers are merged by ascending ``priority`` so a higher
layer overwrites colliding keys from a lower one.
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field

ContextValue = str | bool


class LayerPriority(IntEnum):
    """Built-in layer ranks, lowest to highest precedence."""

    AUTHENTICATED = 10   # identity-derived, empty for guests
    CASE = 20            # task-specific case fields
    COMPUTED = 30        # flags derived from local UI/session state


class ContextLayer(BaseModel):
    """One prioritized layer of context values."""

    model_config = ConfigDict(frozen=True)

    name: str
    priority: int
    values: dict[str, ContextValue] = Field(default_factory=dict)
