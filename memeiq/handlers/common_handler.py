"""
Common handlers for basic bot commands.

Handles:
- /start [referral_code] - Welcome message, referral tracking
- /help - Usage instructions
- /upgrade - Plans and limits
- /trending - Trending tokens (points to the website for now)
"""

import logging

from aiogram import Router
from aiogram.exceptions import TelegramAPIError
from aiogram.filters import Command, CommandObject
from aiogram.types import Message

from memeiq.config.settings import Settings
from memeiq.core.models import UserRecord
from memeiq.services.users.referrals import ReferralService
from memeiq.templates.messages import (
    HELP,
    REFERRAL_APPLIED,
    REFERRAL_NEW_FRIEND,
    TRENDING,
    UPGRADE,
    WELCOME,
)

logger = logging.getLogger(__name__)

router = Router(name="common")


@router.message(Command("start"))
async def handle_start(
    message: Message,
    command: CommandObject,
    user: UserRecord,
    is_new_user: bool,
    referrals: ReferralService,
    settings: Settings,
) -> None:
    """
    Handle /start command.

    Sends the welcome message. A first-time user arriving through a
    referral link (/start <code>) is linked to the referrer, who gets
    a notification.
    """
    await message.answer(WELCOME.format(daily_limit=settings.free_daily_limit))

    if not (is_new_user and command.args):
        return

    referrer = referrals.apply(user, command.args.strip())
    if referrer is None:
        return

    await message.answer(REFERRAL_APPLIED)

    try:
        await message.bot.send_message(
            referrer.user_id,
            REFERRAL_NEW_FRIEND.format(count=len(referrer.referrals)),
        )
    except TelegramAPIError as e:
        # Referrer may have blocked the bot
        logger.warning(f"Could not notify referrer {referrer.user_id}: {e}")


@router.message(Command("help"))
async def handle_help(message: Message) -> None:
    """Send the command reference."""
    await message.answer(HELP)


@router.message(Command("upgrade"))
async def handle_upgrade(message: Message, settings: Settings) -> None:
    await message.answer(
        UPGRADE.format(
            daily_limit=settings.free_daily_limit,
            watchlist_limit=settings.free_watchlist_limit,
            website_url=settings.website_url.rstrip("/"),
        )
    )


@router.message(Command("trending"))
async def handle_trending(message: Message, settings: Settings) -> None:
    await message.answer(TRENDING.format(website_url=settings.website_url.rstrip("/")))
