"""Abstract base class for the search API transport."""

from __future__ import annotations

from abc import ABC, abstractmethod

from caseassist.models.search import SearchRequest, SearchResponse


class ISearchTransport(ABC):
    """Sends an already-transformed request and parses the response."""

    @abstractmethod
    async def send(self, request: SearchRequest) -> SearchResponse:
        """Send *request* and return the parsed response.

        Raises
        ------
        ProviderUnavailableError
            On network errors or non-2xx responses.
        """
