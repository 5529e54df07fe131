"""
Admin commands.

Handles:
- /admin - analytics dashboard
- /admin tier <user_id> <free|pro|whale> - change a user's tier

Only users listed in ADMIN_IDS may use these.
"""

import logging

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message

from memeiq.config.settings import Settings
from memeiq.core.models import Tier
from memeiq.services.users.store import UserStore
from memeiq.templates.messages import ADMIN_ONLY, ADMIN_TIER_CHANGED, ADMIN_TIER_USAGE
from memeiq.utils.formatters import format_admin_dashboard

logger = logging.getLogger(__name__)

router = Router(name="admin")


@router.message(Command("admin"))
async def handle_admin(
    message: Message,
    command: CommandObject,
    settings: Settings,
    store: UserStore,
) -> None:
    """Dispatch /admin subcommands for allow-listed users."""
    if not settings.is_admin(message.from_user.id):
        logger.warning(f"Rejected /admin from user {message.from_user.id}")
        await message.answer(ADMIN_ONLY)
        return

    args = (command.args or "").split()

    if not args:
        await message.answer(
            format_admin_dashboard(store.analytics, store.tier_breakdown(), store.today())
        )
        return

    if args[0].lower() == "tier":
        await _set_tier(message, store, args[1:])
        return

    await message.answer(ADMIN_TIER_USAGE)


async def _set_tier(message: Message, store: UserStore, args: list[str]) -> None:
    if len(args) != 2 or not args[0].isdigit():
        await message.answer(ADMIN_TIER_USAGE)
        return

    try:
        tier = Tier(args[1].lower())
    except ValueError:
        await message.answer(ADMIN_TIER_USAGE)
        return

    record = store.set_tier(int(args[0]), tier)
    logger.info(f"Admin {message.from_user.id} set user {record.user_id} to {tier.value}")
    await message.answer(ADMIN_TIER_CHANGED.format(user_id=record.user_id, tier=tier.value.upper()))
