"""Page location providers."""

from caseassist.providers.browser.memory_location import MemoryLocation

__all__ = ["MemoryLocation"]
