"""Error types raised by the generation pipeline and the report store."""


class StarReportError(Exception):
    """Base class for all STAR report builder errors."""


class ValidationError(StarReportError):
    """Caller input is missing or invalid. Never retried.

    ``fields`` names the offending input fields so the web layer can
    return a field-level message.
    """

    def __init__(self, message, fields=None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields or [])


class ProviderError(StarReportError):
    """The completion provider failed to return a response."""

    kind = "provider_error"

    def __init__(self, message, kind=None):
        super().__init__(message)
        self.message = message
        if kind:
            self.kind = kind


class ProviderUnavailableError(ProviderError):
    """The completion provider cannot serve the requested model."""

    kind = "model_unavailable"


class GenerationError(StarReportError):
    """Generation failed after every fallback path was exhausted."""

    def __init__(self, message, model=None):
        super().__init__(message)
        self.message = message
        self.model = model


class StoreError(StarReportError):
    """The persistence layer is unavailable or rejected the operation."""
