"""
User context and analytics middleware.

Creates the sender's UserRecord on first contact, injects it into the
handler data and counts command usage and daily active users.

Handlers receive:
- user: UserRecord of the sender
- is_new_user: True on the very first update from this user
"""

from collections.abc import Awaitable, Callable
from typing import Any

from aiogram import BaseMiddleware
from aiogram.types import Update

from memeiq.services.users.store import UserStore


def command_name(text: str | None) -> str | None:
    """
    Extract the command from message text.

    Examples:
        >>> command_name("/analyze@MemeIQBot DezX...")
        'analyze'
        >>> command_name("hello") is None
        True
    """
    if not text or not text.startswith("/"):
        return None
    head = text.split(maxsplit=1)[0][1:]
    name = head.split("@", 1)[0].lower()
    return name or None


class AnalyticsMiddleware(BaseMiddleware):
    """
    Usage:
        dp.update.middleware(AnalyticsMiddleware(store))
    """

    def __init__(self, store: UserStore):
        self._store = store

    async def __call__(
        self,
        handler: Callable[[Update, dict[str, Any]], Awaitable[Any]],
        event: Update,
        data: dict[str, Any],
    ) -> Any:
        sender = None
        text = None
        if event.message:
            sender = event.message.from_user
            text = event.message.text
        elif event.callback_query:
            sender = event.callback_query.from_user

        if sender is not None:
            data["is_new_user"] = sender.id not in self._store
            data["user"] = self._store.get_or_create(sender.id)

            command = command_name(text)
            if command:
                self._store.record_command(sender.id, command)
            else:
                self._store.record_activity(sender.id)

        return await handler(event, data)
