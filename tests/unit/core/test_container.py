"""Tests for the dependency injection container."""

import json
import os
from unittest.mock import MagicMock, patch

import pytest

from core.container import (
    Container,
    DocsServiceFactoryProtocol,
    TokenFileDocsServiceFactory,
    get_container,
    reset_container,
    set_container,
)
from core.errors import ServiceConfigurationError


class MockDocsServiceFactory:
    """Mock implementation of DocsServiceFactoryProtocol for testing."""

    def __init__(self, service=None):
        self.service = service or MagicMock()
        self.calls = 0

    def build_docs_service(self):
        self.calls += 1
        return self.service


class TestContainer:
    def test_mock_satisfies_protocol(self):
        assert isinstance(MockDocsServiceFactory(), DocsServiceFactoryProtocol)

    def test_default_factory(self):
        container = Container()
        assert isinstance(container.docs_service_factory, TokenFileDocsServiceFactory)

    def test_docs_service_is_built_once(self):
        factory = MockDocsServiceFactory()
        container = Container(docs_service_factory=factory)
        assert container.docs_service is factory.service
        assert container.docs_service is factory.service
        assert factory.calls == 1


class TestGlobalContainer:
    def test_get_container_creates_default(self):
        reset_container()
        container = get_container()
        assert isinstance(container, Container)
        assert get_container() is container

    def test_set_container(self):
        custom = Container(docs_service_factory=MockDocsServiceFactory())
        set_container(custom)
        assert get_container() is custom

    def test_reset_container(self):
        set_container(Container(docs_service_factory=MockDocsServiceFactory()))
        first = get_container()
        reset_container()
        assert get_container() is not first


class TestTokenFileDocsServiceFactory:
    def test_missing_token_file(self, temp_dir):
        factory = TokenFileDocsServiceFactory(os.path.join(temp_dir, "absent.json"))
        with pytest.raises(ServiceConfigurationError, match="token file not found"):
            factory.build_docs_service()

    def test_invalid_token_file(self, temp_dir):
        path = os.path.join(temp_dir, "token.json")
        with open(path, "w") as f:
            json.dump({"token": "only"}, f)
        with pytest.raises(ServiceConfigurationError, match="invalid"):
            TokenFileDocsServiceFactory(path).build_docs_service()

    def test_builds_docs_v1(self, temp_dir):
        path = os.path.join(temp_dir, "token.json")
        with open(path, "w") as f:
            json.dump(
                {
                    "token": "t",
                    "refresh_token": "r",
                    "client_id": "c",
                    "client_secret": "s",
                    "token_uri": "https://oauth2.googleapis.com/token",
                },
                f,
            )
        with patch("googleapiclient.discovery.build") as build:
            service = TokenFileDocsServiceFactory(path).build_docs_service()
        assert service is build.return_value
        args, kwargs = build.call_args
        assert args == ("docs", "v1")
        assert kwargs["credentials"].refresh_token == "r"
