"""
Inline keyboards for analysis results and the watchlist.

Callback data formats (Telegram caps callback data at 64 bytes,
an address is at most 44):
- watch:add:<address>
- watch:del:<address>
- alert:set:<address>
"""

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from memeiq.core.models import SuggestedAction, UserRecord

WATCH_ADD = "watch:add:"
WATCH_DEL = "watch:del:"
ALERT_SET = "alert:set:"


def build_keyboard(actions: list[SuggestedAction], per_row: int = 2) -> InlineKeyboardMarkup | None:
    """
    Lay out suggested actions as an inline keyboard.

    Returns None when there is nothing to show, so the result can be
    passed straight to reply_markup.
    """
    buttons = [
        InlineKeyboardButton(text=action.label, url=action.url)
        if action.url
        else InlineKeyboardButton(text=action.label, callback_data=action.callback_data)
        for action in actions
    ]
    if not buttons:
        return None

    rows = [buttons[i : i + per_row] for i in range(0, len(buttons), per_row)]
    return InlineKeyboardMarkup(inline_keyboard=rows)


def watchlist_keyboard(user: UserRecord) -> InlineKeyboardMarkup | None:
    """One remove button per watched token."""
    rows = [
        [
            InlineKeyboardButton(
                text=f"❌ {address[:4]}...{address[-4:]}",
                callback_data=f"{WATCH_DEL}{address}",
            )
        ]
        for address in user.watchlist
    ]
    return InlineKeyboardMarkup(inline_keyboard=rows) if rows else None
