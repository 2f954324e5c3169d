"""
Dependency Injection Container for the markdown renderer tools.

Provides a centralized container for the Google Docs service, so the MCP tools
can be tested with a mock service and never build credentials themselves.
"""

import logging
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from core.config import get_config
from core.errors import ServiceConfigurationError

logger = logging.getLogger(__name__)

DOCS_SCOPES = ["https://www.googleapis.com/auth/documents"]


@runtime_checkable
class DocsServiceFactoryProtocol(Protocol):
    """Protocol for objects that build a Google Docs API service."""

    def build_docs_service(self) -> Any:
        """Return a ready `docs` v1 service resource."""
        ...


class TokenFileDocsServiceFactory:
    """
    Builds the Docs service from an authorized-user token file.

    The token file is produced by an external login flow; this factory only
    loads it.
    """

    def __init__(self, token_file: str | None = None):
        self.token_file = token_file or get_config().token_file

    def build_docs_service(self) -> Any:
        from google.oauth2.credentials import Credentials
        from googleapiclient.discovery import build

        try:
            credentials = Credentials.from_authorized_user_file(self.token_file, DOCS_SCOPES)
        except FileNotFoundError as e:
            raise ServiceConfigurationError(
                f"Google Docs token file not found at {self.token_file}. Set GOOGLE_DOCS_TOKEN_FILE."
            ) from e
        except ValueError as e:
            raise ServiceConfigurationError(f"Google Docs token file {self.token_file} is invalid: {e}") from e

        logger.debug(f"Building docs v1 service from {self.token_file}")
        return build("docs", "v1", credentials=credentials, cache_discovery=False)


@dataclass
class Container:
    """
    Dependency injection container.

    Holds the Docs service factory and lazily builds the service once.
    If no factory is provided, defaults to the token-file factory.
    """

    docs_service_factory: DocsServiceFactoryProtocol | None = None
    _docs_service: Any = None

    def __post_init__(self) -> None:
        """Initialize with defaults if not provided."""
        if self.docs_service_factory is None:
            self.docs_service_factory = TokenFileDocsServiceFactory()

    @property
    def docs_service(self) -> Any:
        if self._docs_service is None:
            self._docs_service = self.docs_service_factory.build_docs_service()
        return self._docs_service


# Global container instance
_container: Container | None = None


def get_container() -> Container:
    """
    Get the global container instance.

    Creates a new container with default implementations if none exists.

    Returns:
        The global Container instance.
    """
    global _container
    if _container is None:
        _container = Container()
        logger.debug("Initialized default dependency container")
    return _container


def set_container(container: Container) -> None:
    """
    Set the global container instance.

    Use this for testing to inject mock implementations.

    Args:
        container: The container to use as the global instance.
    """
    global _container
    _container = container
    logger.debug("Set custom dependency container")


def reset_container() -> None:
    """
    Reset the global container.

    Use this between tests to ensure a clean state.
    """
    global _container
    _container = None
    logger.debug("Reset dependency container")
