"""Tests for the handle_http_errors decorator."""

from unittest.mock import MagicMock

import pytest
from googleapiclient.errors import HttpError

from core.errors import (
    APIError,
    HostCommitError,
    PermissionDeniedError,
    ResourceNotFoundError,
    ValidationError,
)
from core.utils import handle_http_errors


def _http_error(status):
    resp = MagicMock()
    resp.status = status
    resp.reason = "error"
    return HttpError(resp, b'{"error": {"message": "nope"}}')


class TestHandleHttpErrors:
    @pytest.mark.asyncio
    async def test_returns_result(self):
        @handle_http_errors("ok_tool")
        async def tool():
            return "done"

        assert await tool() == "done"

    @pytest.mark.asyncio
    async def test_preserves_name(self):
        @handle_http_errors("named")
        async def insert_markdown():
            return None

        assert insert_markdown.__name__ == "insert_markdown"

    @pytest.mark.asyncio
    async def test_404_maps_to_not_found(self):
        @handle_http_errors("tool")
        async def tool():
            raise _http_error(404)

        with pytest.raises(ResourceNotFoundError) as exc_info:
            await tool()
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_403_mentions_credentials(self):
        @handle_http_errors("tool")
        async def tool():
            raise _http_error(403)

        with pytest.raises(PermissionDeniedError, match="credentials"):
            await tool()

    @pytest.mark.asyncio
    async def test_500_maps_to_api_error(self):
        @handle_http_errors("tool")
        async def tool():
            raise _http_error(500)

        with pytest.raises(APIError) as exc_info:
            await tool()
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_validation_error_passes_through(self):
        @handle_http_errors("tool")
        async def tool():
            raise ValidationError("bad id")

        with pytest.raises(ValidationError):
            await tool()

    @pytest.mark.asyncio
    async def test_commit_error_passes_through(self):
        @handle_http_errors("tool")
        async def tool():
            raise HostCommitError("failed", staged_count=3)

        with pytest.raises(HostCommitError):
            await tool()

    @pytest.mark.asyncio
    async def test_unexpected_error_is_wrapped(self):
        @handle_http_errors("tool")
        async def tool():
            raise KeyError("missing")

        with pytest.raises(APIError, match="unexpected error occurred in tool"):
            await tool()

    @pytest.mark.asyncio
    async def test_network_error_is_not_retried(self):
        calls = []

        @handle_http_errors("tool")
        async def tool():
            calls.append(1)
            raise ConnectionResetError("reset by peer")

        with pytest.raises(APIError, match="unexpected error occurred in tool"):
            await tool()
        assert len(calls) == 1
