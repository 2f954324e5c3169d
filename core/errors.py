"""
Custom error types for markdown rendering and document hosts.

Malformed token streams are never errors: the renderer skips what it cannot
use. The exceptions below cover the outer layers only: misused hosts, failed
commits, bad tool input and Google API failures.
"""

# =============================================================================
# Base Exception Hierarchy
# =============================================================================


class MarkdownRenderError(Exception):
    """Base exception for all markdown rendering errors."""

    pass


# =============================================================================
# Host Errors
# =============================================================================


class HostStateError(MarkdownRenderError):
    """Raised when a document host is used after its batch was committed."""

    pass


class HostCommitError(MarkdownRenderError):
    """Raised when a host fails to apply its staged batch."""

    def __init__(self, message: str, staged_count: int = 0):
        super().__init__(message)
        self.staged_count = staged_count


# =============================================================================
# Configuration Errors
# =============================================================================


class ServiceConfigurationError(MarkdownRenderError):
    """Raised when a service is misconfigured."""

    pass


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(MarkdownRenderError):
    """Raised when input validation fails."""

    pass


# =============================================================================
# API Errors
# =============================================================================


class APIError(MarkdownRenderError):
    """Raised for general Google API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ResourceNotFoundError(APIError):
    """Raised when a requested document doesn't exist (404)."""

    pass


class PermissionDeniedError(APIError):
    """Raised when the user lacks permission for an operation (403)."""

    pass


class RateLimitError(APIError):
    """Raised when API rate limits are exceeded (429)."""

    pass


def api_error_for_status(message: str, status_code: int | None) -> APIError:
    """Pick the most specific APIError subclass for an HTTP status code."""
    if status_code == 404:
        return ResourceNotFoundError(message, status_code=status_code)
    if status_code == 403:
        return PermissionDeniedError(message, status_code=status_code)
    if status_code == 429:
        return RateLimitError(message, status_code=status_code)
    return APIError(message, status_code=status_code)


def format_error(operation: str, error: Exception) -> str:
    """Format an error for display to the user."""
    return f"{operation} failed: {error}"
