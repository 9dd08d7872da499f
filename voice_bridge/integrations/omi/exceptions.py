"""Custom exception classes for the OMI client."""


class OmiError(Exception):
    """Base exception for OMI API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize OmiError.

        Args:
            message: Error message
            status_code: HTTP status code if applicable
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code:
            return f"OMI API Error ({self.status_code}): {self.message}"
        return f"OMI API Error: {self.message}"


class OmiConfigurationError(OmiError):
    """Raised when app credentials are missing."""
