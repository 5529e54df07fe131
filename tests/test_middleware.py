"""
Tests for middleware components.

Tests error handling, logging and analytics middleware behavior.
Uses mock objects to simulate aiogram updates.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from memeiq.core.exceptions import (
    InvalidAddressFormat,
    MemeIQError,
    QuotaExceeded,
    RemoteDataError,
    RemoteServiceError,
    RemoteUnavailable,
    WatchlistError,
)
from memeiq.middleware.analytics import AnalyticsMiddleware, command_name
from memeiq.middleware.error_handler import ErrorHandlerMiddleware
from memeiq.middleware.logging import LoggingMiddleware
from memeiq.services.users.store import UserStore
from memeiq.templates.messages import ERROR_GENERIC


class MockUpdate:
    """Mock aiogram Update object."""

    def __init__(self, text: str | None = "test message", user_id: int = 12345):
        self.update_id = 1
        self.message = MagicMock()
        self.message.text = text
        self.message.from_user = MagicMock()
        self.message.from_user.id = user_id
        self.message.from_user.username = "testuser"
        self.message.answer = AsyncMock()
        self.callback_query = None


class MockCallbackUpdate:
    """Mock aiogram Update carrying a callback query."""

    def __init__(self, data: str = "watch:add:x", user_id: int = 12345):
        self.update_id = 2
        self.message = None
        self.callback_query = MagicMock()
        self.callback_query.data = data
        self.callback_query.from_user = MagicMock()
        self.callback_query.from_user.id = user_id
        self.callback_query.from_user.username = None
        self.callback_query.answer = AsyncMock()
        self.callback_query.message.answer = AsyncMock()


class TestErrorHandlerMiddleware:
    """Tests for ErrorHandlerMiddleware."""

    @pytest.fixture
    def middleware(self) -> ErrorHandlerMiddleware:
        return ErrorHandlerMiddleware()

    @pytest.fixture
    def mock_update(self) -> MockUpdate:
        return MockUpdate()

    @pytest.mark.asyncio
    async def test_passes_through_on_success(
        self,
        middleware: ErrorHandlerMiddleware,
        mock_update: MockUpdate,
    ) -> None:
        """Should pass through when handler succeeds."""
        handler = AsyncMock(return_value="success")

        result = await middleware(handler, mock_update, {})

        assert result == "success"
        handler.assert_called_once()
        mock_update.message.answer.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            InvalidAddressFormat(),
            QuotaExceeded(),
            WatchlistError(),
            RemoteServiceError(status=500),
            RemoteDataError(),
            RemoteUnavailable(),
            MemeIQError(),
        ],
        ids=lambda e: type(e).__name__,
    )
    async def test_known_errors_answer_with_their_message(
        self,
        middleware: ErrorHandlerMiddleware,
        mock_update: MockUpdate,
        error: MemeIQError,
    ) -> None:
        """Should catch MemeIQError subclasses and reply with error.message."""
        handler = AsyncMock(side_effect=error)

        result = await middleware(handler, mock_update, {})

        assert result is None
        mock_update.message.answer.assert_called_once_with(error.message)

    @pytest.mark.asyncio
    async def test_catches_unknown_error(
        self,
        middleware: ErrorHandlerMiddleware,
        mock_update: MockUpdate,
    ) -> None:
        """Should catch unknown errors and send generic message."""
        handler = AsyncMock(side_effect=RuntimeError("Unknown"))

        with patch("memeiq.middleware.error_handler.logger") as mock_logger:
            result = await middleware(handler, mock_update, {})

            mock_logger.exception.assert_called_once()

        assert result is None
        mock_update.message.answer.assert_called_once_with(ERROR_GENERIC)

    @pytest.mark.asyncio
    async def test_uses_error_message(
        self,
        middleware: ErrorHandlerMiddleware,
        mock_update: MockUpdate,
    ) -> None:
        """Should use error's message for user, not the technical one."""
        handler = AsyncMock(
            side_effect=InvalidAddressFormat("Custom error message", technical_message="len=3")
        )

        await middleware(handler, mock_update, {})

        call_args = mock_update.message.answer.call_args
        assert call_args[0][0] == "Custom error message"

    @pytest.mark.asyncio
    async def test_remote_errors_logged_as_warning(
        self,
        middleware: ErrorHandlerMiddleware,
        mock_update: MockUpdate,
    ) -> None:
        handler = AsyncMock(side_effect=RemoteServiceError(status=502))

        with patch("memeiq.middleware.error_handler.logger") as mock_logger:
            await middleware(handler, mock_update, {})

            mock_logger.warning.assert_called_once()
            assert "502" in mock_logger.warning.call_args[0][0]

    @pytest.mark.asyncio
    async def test_callback_error_stops_spinner(self, middleware: ErrorHandlerMiddleware) -> None:
        update = MockCallbackUpdate()
        handler = AsyncMock(side_effect=RuntimeError("boom"))

        await middleware(handler, update, {})

        update.callback_query.answer.assert_called_once()
        update.callback_query.message.answer.assert_called_once_with(ERROR_GENERIC)

    @pytest.mark.asyncio
    async def test_failed_reply_is_logged(
        self,
        middleware: ErrorHandlerMiddleware,
        mock_update: MockUpdate,
    ) -> None:
        """A reply that cannot be sent must not raise out of the middleware."""
        mock_update.message.answer.side_effect = RuntimeError("chat not found")
        handler = AsyncMock(side_effect=QuotaExceeded())

        result = await middleware(handler, mock_update, {})

        assert result is None


class TestLoggingMiddleware:
    """Tests for LoggingMiddleware."""

    @pytest.fixture
    def middleware(self) -> LoggingMiddleware:
        return LoggingMiddleware()

    @pytest.fixture
    def mock_update(self) -> MockUpdate:
        return MockUpdate(text="test token address")

    @pytest.mark.asyncio
    async def test_passes_through_result(
        self,
        middleware: LoggingMiddleware,
        mock_update: MockUpdate,
    ) -> None:
        """Should pass through handler result."""
        handler = AsyncMock(return_value="result")

        result = await middleware(handler, mock_update, {})

        assert result == "result"

    @pytest.mark.asyncio
    async def test_logs_incoming_message(
        self,
        middleware: LoggingMiddleware,
        mock_update: MockUpdate,
    ) -> None:
        """Should log incoming message with sender and text."""
        handler = AsyncMock(return_value=None)

        with patch("memeiq.middleware.logging.logger") as mock_logger:
            await middleware(handler, mock_update, {})

            mock_logger.info.assert_called_once()
            line = mock_logger.info.call_args[0][0]
            assert "user=12345 (@testuser)" in line
            assert 'text="test token address"' in line

    @pytest.mark.asyncio
    async def test_logs_error_on_exception(
        self,
        middleware: LoggingMiddleware,
        mock_update: MockUpdate,
    ) -> None:
        """Should log error and re-raise when handler raises."""
        handler = AsyncMock(side_effect=RuntimeError("test error"))

        with patch("memeiq.middleware.logging.logger") as mock_logger:
            with pytest.raises(RuntimeError):
                await middleware(handler, mock_update, {})

            mock_logger.error.assert_called()

    def test_truncates_long_messages(self, middleware: LoggingMiddleware) -> None:
        """Should truncate very long messages in logs."""
        long_text = "a" * 200

        info = middleware._describe_payload(MockUpdate(text=long_text))

        assert info == f'text="{"a" * 100}..."'

    def test_describes_callback(self, middleware: LoggingMiddleware) -> None:
        update = MockCallbackUpdate(data="watch:del:abc")

        assert middleware._describe_sender(update) == "user=12345 (no_username)"
        assert middleware._describe_payload(update) == "callback=watch:del:abc"


class TestAnalyticsMiddleware:
    """Tests for AnalyticsMiddleware."""

    @pytest.fixture
    def middleware(self, store: UserStore) -> AnalyticsMiddleware:
        return AnalyticsMiddleware(store)

    @pytest.mark.asyncio
    async def test_injects_user(self, middleware: AnalyticsMiddleware, store: UserStore) -> None:
        handler = AsyncMock(return_value=None)
        data: dict = {}

        await middleware(handler, MockUpdate(user_id=7), data)

        assert data["user"] is store.get(7)
        assert data["is_new_user"] is True
        handler.assert_called_once()

    @pytest.mark.asyncio
    async def test_second_update_is_not_new(self, middleware: AnalyticsMiddleware) -> None:
        handler = AsyncMock(return_value=None)
        await middleware(handler, MockUpdate(user_id=7), {})

        data: dict = {}
        await middleware(handler, MockUpdate(user_id=7), data)

        assert data["is_new_user"] is False

    @pytest.mark.asyncio
    async def test_counts_commands(self, middleware: AnalyticsMiddleware, store: UserStore, clock) -> None:
        handler = AsyncMock(return_value=None)

        await middleware(handler, MockUpdate(text="/analyze DezX", user_id=1), {})
        await middleware(handler, MockUpdate(text="/analyze@MemeIQBot DezX", user_id=2), {})
        await middleware(handler, MockUpdate(text="just chatting", user_id=3), {})

        assert store.analytics.command_usage == {"analyze": 2}
        assert store.analytics.daily[clock.day].active_users == {1, 2, 3}
        assert store.analytics.total_users == 3

    @pytest.mark.asyncio
    async def test_callback_sender(self, middleware: AnalyticsMiddleware, store: UserStore) -> None:
        data: dict = {}

        await middleware(AsyncMock(), MockCallbackUpdate(user_id=9), data)

        assert data["user"].user_id == 9
        assert store.analytics.command_usage == {}


class TestCommandName:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("/start", "start"),
            ("/start MIQ21I3V9", "start"),
            ("/Analyze@MemeIQBot addr", "analyze"),
            ("hello", None),
            ("", None),
            (None, None),
            ("/", None),
        ],
    )
    def test_command_name(self, text, expected) -> None:
        assert command_name(text) == expected
