"""Engine session lifecycle models.

An :class:`EngineSession` is the single mutable record kept per
``engine_id``.  The bootstrapper advances its ``phase``; every other
component only reads it through the session registry.

    UNINITIALIZED → CONFIG_PENDING → CONSTRUCTING → INITIALIZED
                          │
                          └──→ UNAVAILABLE   (no usable configuration)

``INITIALIZED`` and ``UNAVAILABLE`` are terminal for the lifetime of the
registry that owns the session.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from caseassist.models.configuration import EngineConfiguration

if TYPE_CHECKING:
    from caseassist.interfaces.search_engine import ISearchEngine
    from caseassist.pipeline.middleware import MiddlewarePipeline


class BootstrapPhase(str, Enum):  # noqa: UP042
    UNINITIALIZED = "UNINITIALIZED"
    CONFIG_PENDING = "CONFIG_PENDING"
    CONSTRUCTING = "CONSTRUCTING"
    INITIALIZED = "INITIALIZED"
    UNAVAILABLE = "UNAVAILABLE"

    @property
    def is_terminal(self) -> bool:
        return self in (BootstrapPhase.INITIALIZED, BootstrapPhase.UNAVAILABLE)


@dataclass
class EngineSession:
    """Per-engine-id session record.

    A plain mutable dataclass (not Pydantic): it holds live objects (the
    engine, the asyncio event) and is never serialized.
    """

    engine_id: str
    phase: BootstrapPhase = BootstrapPhase.UNINITIALIZED
    configuration: EngineConfiguration | None = None
    engine: ISearchEngine | None = None
    middleware: MiddlewarePipeline | None = None
    # Callbacks waiting for the INITIALIZED signal, in registration order.
    pending_callbacks: list[Callable] = field(default_factory=list)
    ready: asyncio.Event = field(default_factory=asyncio.Event)

    @property
    def initialized(self) -> bool:
        return self.phase is BootstrapPhase.INITIALIZED
