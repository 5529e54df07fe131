"""
Per-user account handlers.

Handles:
- /watchlist - watched tokens with remove buttons
- /stats - quota, counters and referral link
- watch:del:<address> button presses
"""

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from memeiq.core.models import UserRecord
from memeiq.services.users.quota import QuotaPolicy
from memeiq.services.users.referrals import ReferralService
from memeiq.services.watchlist import WatchlistService
from memeiq.templates.messages import WATCHLIST_NOT_FOUND, WATCHLIST_REMOVED
from memeiq.utils.formatters import format_user_stats, format_watchlist
from memeiq.utils.keyboards import WATCH_DEL, watchlist_keyboard

router = Router(name="account")


@router.message(Command("watchlist"))
async def handle_watchlist(
    message: Message,
    user: UserRecord,
    watchlist: WatchlistService,
) -> None:
    await message.answer(
        format_watchlist(user, watchlist.limit_for(user)),
        reply_markup=watchlist_keyboard(user),
    )


@router.callback_query(F.data.startswith(WATCH_DEL))
async def handle_watch_remove(
    callback: CallbackQuery,
    user: UserRecord,
    watchlist: WatchlistService,
) -> None:
    """Remove a token and refresh the watchlist message in place."""
    address = callback.data.removeprefix(WATCH_DEL)

    if not watchlist.remove(user, address):
        await callback.answer(WATCHLIST_NOT_FOUND)
        return

    await callback.answer(WATCHLIST_REMOVED)
    if callback.message:
        await callback.message.edit_text(
            format_watchlist(user, watchlist.limit_for(user)),
            reply_markup=watchlist_keyboard(user),
        )


@router.message(Command("stats"))
async def handle_stats(
    message: Message,
    user: UserRecord,
    quota: QuotaPolicy,
    referrals: ReferralService,
) -> None:
    await message.answer(
        format_user_stats(user, quota.remaining(user), referrals.link_for(user))
    )
