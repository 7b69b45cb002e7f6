"""Utility modules for the case-assist search layer.

- **errors** -- Exception hierarchy rooted at CaseAssistError; providers
  raise, the bootstrap path catches and logs.
- **events** -- Named component events (generated-answer toggle, aria live
  messages) exchanged between the controller and its children.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

from caseassist.utils.errors import (
    CaseAssistError,
    ConfigurationError,
    MiddlewareError,
    ProviderUnavailableError,
    TemplateRegistrationError,
)
from caseassist.utils.events import (
    ARIA_LIVE_MESSAGE,
    GENERATED_ANSWER_TOGGLE,
    REGISTER_ARIA_REGION,
    EventTarget,
)
from caseassist.utils.logging import configure_logging, get_logger

__all__ = [
    "ARIA_LIVE_MESSAGE",
    "CaseAssistError",
    "ConfigurationError",
    "EventTarget",
    "GENERATED_ANSWER_TOGGLE",
    "MiddlewareError",
    "ProviderUnavailableError",
    "REGISTER_ARIA_REGION",
    "TemplateRegistrationError",
    "configure_logging",
    "get_logger",
]
