"""Capability protocol for input-bearing collaborators of the flow screens."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Validatable(Protocol):
    """An input that can check and display its own validity.

    ``title`` names the case field the input feeds and ``value`` is its
    current content; screens copy both into the case data on navigation.
    """

    title: str
    value: str

    def report_validity(self) -> bool:
        """Show validation feedback and return ``True`` when the input is valid."""
        ...
