"""
Shared exceptions for the document analysis pipeline.

Every error is terminal for the invocation and carries a human-readable
message; the command surface returns only that message to the caller.
"""


class AnalysisError(Exception):
    """Raised when a document analysis step fails."""

    pass


class ConfigurationError(AnalysisError):
    """Raised when the API credential cannot be resolved."""

    pass


class ExtractionError(AnalysisError):
    """Raised when pdftotext cannot be started or exits with an error."""

    pass


class ApiError(AnalysisError):
    """Raised when the completion API request fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(AnalysisError):
    """Raised when the API response body is not valid JSON."""

    pass


class MissingContentError(AnalysisError):
    """Raised when the API response has no message content."""

    pass


class ParseError(AnalysisError):
    """Raised when the model output is not valid JSON."""

    pass
