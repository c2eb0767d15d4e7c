class ExtractionError(Exception):
    """Raised when prospect extraction fails."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
