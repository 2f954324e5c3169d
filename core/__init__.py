"""Core utilities for the markdown renderer tools."""

from core.config import RenderConfig, get_config, reload_config
from core.container import Container, get_container, reset_container, set_container
from core.errors import (
    APIError,
    HostCommitError,
    HostStateError,
    MarkdownRenderError,
    PermissionDeniedError,
    RateLimitError,
    ResourceNotFoundError,
    ServiceConfigurationError,
    ValidationError,
    api_error_for_status,
    format_error,
)
from core.utils import (
    handle_http_errors,
    validate_document_id,
    validate_positive_int,
)

__all__ = [
    "APIError",
    "api_error_for_status",
    "Container",
    "format_error",
    "get_config",
    "get_container",
    "handle_http_errors",
    "HostCommitError",
    "HostStateError",
    "MarkdownRenderError",
    "PermissionDeniedError",
    "RateLimitError",
    "reload_config",
    "RenderConfig",
    "reset_container",
    "ResourceNotFoundError",
    "ServiceConfigurationError",
    "set_container",
    "validate_document_id",
    "validate_positive_int",
    "ValidationError",
]
