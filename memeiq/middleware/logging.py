"""
Request logging middleware.

One INFO line per incoming update (who sent it and what), one DEBUG
line with the handler chain duration, and an ERROR line with the
duration when the chain raised.
"""

import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

from aiogram import BaseMiddleware
from aiogram.types import Update, User

logger = logging.getLogger(__name__)


def _sender(event: Update) -> User | None:
    if event.message:
        return event.message.from_user
    if event.callback_query:
        return event.callback_query.from_user
    return None


class LoggingMiddleware(BaseMiddleware):
    """
    Registered outermost so that errors turned into replies by
    ErrorHandlerMiddleware are still timed.

    Usage:
        dp.update.middleware(LoggingMiddleware())
    """

    MAX_TEXT_LENGTH = 100

    async def __call__(
        self,
        handler: Callable[[Update, dict[str, Any]], Awaitable[Any]],
        event: Update,
        data: dict[str, Any],
    ) -> Any:
        started = time.monotonic()
        logger.info(f"Incoming: {self._describe_sender(event)} | {self._describe_payload(event)}")

        try:
            result = await handler(event, data)
        except Exception as e:
            logger.error(f"Failed after {self._elapsed_ms(started):.2f}ms: {type(e).__name__}: {e}")
            raise

        logger.debug(f"Handled update {event.update_id} in {self._elapsed_ms(started):.2f}ms")
        return result

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return (time.monotonic() - started) * 1000

    def _describe_sender(self, event: Update) -> str:
        """user=<id> (@username) or user=unknown."""
        user = _sender(event)
        if user is None:
            return "user=unknown"
        handle = f"@{user.username}" if user.username else "no_username"
        return f"user={user.id} ({handle})"

    def _describe_payload(self, event: Update) -> str:
        """Message text cut to MAX_TEXT_LENGTH, callback data, or the update kind."""
        if event.callback_query:
            return f"callback={event.callback_query.data}"

        text = event.message.text if event.message else None
        if not text:
            return "type=other"

        if len(text) > self.MAX_TEXT_LENGTH:
            text = f"{text[: self.MAX_TEXT_LENGTH]}..."
        return f'text="{text}"'
