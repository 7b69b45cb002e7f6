"""Session storage providers."""

from caseassist.providers.storage.memory_session_storage import MemorySessionStorage

__all__ = ["MemorySessionStorage"]
