"""Custom exception hierarchy for the case-assist search layer.

All application exceptions inherit from :class:`CaseAssistError`, which
carries an optional ``provider_name`` so log handlers can identify which
collaborator (e.g. "configuration_endpoint", "search_api") caused the
failure.

    CaseAssistError  (base -- catch-all for any case-assist error)
    +-- ConfigurationError        (invalid settings / registration input)
    |   +-- TemplateRegistrationError  (result template rules out of order)
    +-- ProviderUnavailableError  (configuration endpoint / search API down)
    +-- MiddlewareError           (pipeline mutated after engine construction)

Most failures in the bootstrap path never surface as exceptions: an
unavailable configuration or a missing live region is logged and absorbed,
leaving the interface idle rather than breaking the host page.  These
classes are raised at the provider boundary and caught one level up.
"""


class CaseAssistError(Exception):
    """Base exception for all case-assist errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external collaborator triggered the
    error.  ``__str__`` prefixes the provider name in brackets, e.g.
    ``[search_api] HTTP 503``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Configuration / registration errors
# ---------------------------------------------------------------------------

class ConfigurationError(CaseAssistError):
    """Raised when configuration or registration input is invalid."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class TemplateRegistrationError(ConfigurationError):
    """Raised when result template rules would shadow one another.

    The catch-all rule (no conditions) must be registered exactly once and
    last; anything declared after it could never be selected.
    """

    def __init__(
        self,
        message: str = "Invalid result template registration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# External service / provider errors
# ---------------------------------------------------------------------------

class ProviderUnavailableError(CaseAssistError):
    """Raised when the configuration endpoint or search API is unreachable.

    The config resolver catches this and treats the session as "not ready";
    the engine catches it per search and keeps its previous results.
    """

    def __init__(
        self,
        message: str = "External service is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Pipeline errors
# ---------------------------------------------------------------------------

class MiddlewareError(CaseAssistError):
    """Raised when a middleware pipeline is modified after it was sealed."""

    def __init__(
        self,
        message: str = "Middleware pipeline is sealed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
