"""Engine session lifecycle and its request/response/context pipelines."""

from caseassist.pipeline.aria_live_bridge import AriaLiveEventBridge
from caseassist.pipeline.bootstrapper import EngineBootstrapper
from caseassist.pipeline.config_resolver import ConfigResolver
from caseassist.pipeline.context_composer import ContextComposer
from caseassist.pipeline.middleware import MiddlewarePipeline, build_default_pipeline
from caseassist.pipeline.session_registry import SessionRegistry
from caseassist.pipeline.url_sync import UrlStateSynchronizer

__all__ = [
    "AriaLiveEventBridge",
    "ConfigResolver",
    "ContextComposer",
    "EngineBootstrapper",
    "MiddlewarePipeline",
    "SessionRegistry",
    "UrlStateSynchronizer",
    "build_default_pipeline",
]
