"""
Error handling middleware for aiogram.

Last line of defence: analysis failures are already turned into an
edited placeholder by the token handler, so anything reaching this
middleware escaped a handler. It is logged and answered with a
user-friendly message so the bot keeps running.

Exception handling priority:
1. InvalidAddressFormat / QuotaExceeded / WatchlistError -> their own message
2. RemoteServiceError / RemoteDataError / RemoteUnavailable -> their own message
3. Other MemeIQError -> its message
4. Unknown errors -> generic apology, full traceback in the log
"""

import logging
from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import Message, Update

from memeiq.core.exceptions import (
    InvalidAddressFormat,
    MemeIQError,
    QuotaExceeded,
    RemoteDataError,
    RemoteServiceError,
    RemoteUnavailable,
    WatchlistError,
)
from memeiq.templates.messages import ERROR_GENERIC

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware(BaseMiddleware):
    """
    Global error handling middleware.

    Catches exceptions from handlers and:
    1. Logs technical details for debugging
    2. Sends user-friendly message to the user
    3. Prevents exception from crashing the bot

    Usage:
        dp.update.middleware(ErrorHandlerMiddleware())
    """

    async def __call__(
        self,
        handler: Callable[[Update, Dict[str, Any]], Awaitable[Any]],
        event: Update,
        data: Dict[str, Any],
    ) -> Any:
        try:
            return await handler(event, data)

        except (InvalidAddressFormat, QuotaExceeded, WatchlistError) as e:
            # User-correctable, nothing for us to fix
            await self._handle_error(event, e, log_level="info")

        except (RemoteServiceError, RemoteDataError, RemoteUnavailable) as e:
            await self._handle_error(event, e, log_level="warning")

        except MemeIQError as e:
            await self._handle_error(event, e, log_level="error")

        except Exception as e:
            logger.exception(f"Unexpected error: {type(e).__name__}: {e}")
            await self._send_error_message(event, ERROR_GENERIC)

        return None

    async def _handle_error(
        self,
        event: Update,
        error: MemeIQError,
        log_level: str = "error",
    ) -> None:
        """
        Handle a known error type.

        Args:
            event: The update that caused the error
            error: The exception that was raised
            log_level: Logging level (info, warning, error)
        """
        log_func = getattr(logger, log_level)
        log_func(f"{type(error).__name__}: {error.technical_message}")

        await self._send_error_message(event, error.message or ERROR_GENERIC)

    async def _send_error_message(self, event: Update, message: str) -> None:
        """
        Send error message to user.

        Callback queries are answered with the chat message and the
        spinner on the button is stopped.
        """
        msg: Message | None = None

        if event.message:
            msg = event.message
        elif event.callback_query and event.callback_query.message:
            msg = event.callback_query.message

        try:
            if event.callback_query:
                await event.callback_query.answer()
            if msg:
                await msg.answer(message)
        except Exception as e:
            logger.error(f"Failed to send error message: {e}")
