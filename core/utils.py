import functools
import logging
import re

from googleapiclient.errors import HttpError

from core.errors import APIError, HostCommitError, ValidationError, api_error_for_status

logger = logging.getLogger(__name__)

_DOCUMENT_ID_RE = re.compile(r"^[\w-]+$")


def validate_document_id(document_id: str, param_name: str = "document_id") -> str:
    """Validate a Google Docs document ID."""
    if not document_id:
        raise ValidationError(f"{param_name} is required")

    document_id = document_id.strip()
    if not document_id:
        raise ValidationError(f"{param_name} cannot be empty")

    if not _DOCUMENT_ID_RE.match(document_id):
        raise ValidationError(f"{param_name} contains invalid characters")

    return document_id


def validate_positive_int(value: int, param_name: str, max_value: int | None = None) -> int:
    """Validate a positive integer."""
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise ValidationError(f"{param_name} must be a positive integer")

    if max_value is not None and value > max_value:
        raise ValidationError(f"{param_name} cannot exceed {max_value}")

    return value


def handle_http_errors(tool_name: str):
    """
    A decorator to handle Google API HttpErrors in a standardized way.

    It wraps a tool coroutine, catches HttpError, logs a detailed error message,
    and raises the matching APIError subclass (404, 403, 429, other).
    Writes are never retried: a failed batchUpdate is reported, not replayed.

    Args:
        tool_name (str): The name of the tool being decorated (e.g., 'insert_markdown').
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except ValidationError as e:
                logger.warning(f"Input error in {tool_name}: {e}")
                raise
            except HttpError as error:
                status = getattr(error.resp, "status", None)
                if status in (401, 403):
                    message = (
                        f"API error in {tool_name}: {error}. "
                        f"The Docs credentials may be expired or lack access to this document."
                    )
                else:
                    message = f"API error in {tool_name}: {error}"

                logger.error(f"API error in {tool_name}: {error}", exc_info=True)
                raise api_error_for_status(message, status) from error
            except (APIError, HostCommitError):
                raise
            except Exception as e:
                message = f"An unexpected error occurred in {tool_name}: {e}"
                logger.exception(message)
                raise APIError(message) from e

        return wrapper

    return decorator
