"""Abstract base class for the stateful search engine collaborator.

The engine is the external runtime every component dispatches actions
into.  This layer only relies on the narrow surface below: fire-and-forget
dispatch, a state snapshot with change notification, and the URL-fragment
serialize/synchronize pair used by the URL state synchronizer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from caseassist.models.actions import EngineAction
from caseassist.models.search import EngineState


class ISearchEngine(ABC):
    """Contract for an engine session's runtime."""

    @property
    @abstractmethod
    def state(self) -> EngineState:
        """Return the current state snapshot."""

    @property
    @abstractmethod
    def fragment(self) -> str:
        """Return the URL-fragment serialization of the current state."""

    @abstractmethod
    def dispatch(self, action: EngineAction) -> None:
        """Apply *action*; asynchronous work is ordered internally."""

    @abstractmethod
    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Call *listener* after every state change.

        Returns
        -------
        Callable
            A function that removes the subscription when called.
        """

    @abstractmethod
    def synchronize(self, fragment: str, search: bool = True) -> bool:
        """Restore query parameters from a URL fragment.

        Returns ``True`` when the state changed.  Synchronizing with the
        fragment the engine would itself produce is a no-op.  With
        *search* set, a changed state also triggers a search; the initial
        restore passes ``False`` and leaves searching to the first dispatch.
        """
