"""Abstract base class for engine configuration providers.

The configuration endpoint hands back a JSON-serialized object describing
how to reach the search platform (organisation, access token, platform
URL).  Providers return the raw text; parsing and validation belong to the
config resolver so every provider is treated the same way.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IConfigurationProvider(ABC):
    """Contract for fetching the raw engine configuration payload."""

    @abstractmethod
    async def fetch_configuration(self) -> str | None:
        """Fetch the JSON-serialized configuration.

        Returns
        -------
        str or None
            The raw payload, or ``None`` when the source has nothing to
            offer (e.g. a missing file).

        Raises
        ------
        ProviderUnavailableError
            If the source could not be reached.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier used in log events."""
