"""
Token analysis handlers.

Handles:
- /analyze <address> - full analysis
- /quick <address> - compact analysis
- free text containing an address - auto-detected analysis
- inline buttons under a result (watchlist, alert)

Every analysis sends a "please wait" placeholder first and then edits
that same message with the result or the error, so one request leaves
exactly one message in the chat.
"""

import logging

from aiogram import F, Router
from aiogram.filters import Command, CommandObject
from aiogram.types import CallbackQuery, Message

from memeiq.core.exceptions import InvalidAddressFormat, MemeIQError, WatchlistError
from memeiq.core.models import AnalysisReport, UserRecord
from memeiq.services.orchestrator import AnalysisOrchestrator
from memeiq.services.watchlist import WatchlistService
from memeiq.templates.messages import (
    ALERT_EXISTS,
    ALERT_SET,
    ANALYZE_USAGE,
    ANALYZING,
    ERROR_BAD_CALLBACK,
    WATCHLIST_ADDED,
)
from memeiq.utils.keyboards import ALERT_SET as ALERT_SET_PREFIX
from memeiq.utils.keyboards import WATCH_ADD, build_keyboard
from memeiq.utils.validators import extract_address

logger = logging.getLogger(__name__)

router = Router(name="token")


async def run_analysis(
    message: Message,
    orchestrator: AnalysisOrchestrator,
    address: str,
    auto_detected: bool = False,
    compact: bool = False,
) -> AnalysisReport | None:
    """
    Analyse an address and show the outcome in a single message.

    Errors from the orchestrator become the placeholder's text. For
    auto-detected addresses the placeholder is deleted instead, so a
    false positive in casual chat leaves no trace.

    Returns:
        The report on success, None on a handled failure
    """
    placeholder = await message.answer(ANALYZING)

    try:
        report = await orchestrator.analyze(
            message.from_user.id,
            address,
            auto_detected=auto_detected,
            compact=compact,
        )
    except MemeIQError as e:
        if auto_detected:
            logger.debug(f"Auto-detected analysis dropped: {type(e).__name__}: {e}")
            await placeholder.delete()
            return None

        logger.info(f"Analysis failed: {type(e).__name__}: {e}")
        await placeholder.edit_text(e.message)
        return None

    await placeholder.edit_text(report.text, reply_markup=build_keyboard(report.actions))
    return report


@router.message(Command("analyze"))
async def handle_analyze(
    message: Message,
    command: CommandObject,
    orchestrator: AnalysisOrchestrator,
) -> None:
    """Handle /analyze <address>."""
    if not command.args:
        await message.answer(ANALYZE_USAGE.format(command="analyze"))
        return

    await run_analysis(message, orchestrator, command.args.strip())


@router.message(Command("quick"))
async def handle_quick(
    message: Message,
    command: CommandObject,
    orchestrator: AnalysisOrchestrator,
) -> None:
    """Handle /quick <address>."""
    if not command.args:
        await message.answer(ANALYZE_USAGE.format(command="quick"))
        return

    await run_analysis(message, orchestrator, command.args.strip(), compact=True)


@router.callback_query(F.data.startswith(WATCH_ADD))
async def handle_watch_add(
    callback: CallbackQuery,
    user: UserRecord,
    watchlist: WatchlistService,
) -> None:
    """Add the analysed token to the user's watchlist."""
    address = callback.data.removeprefix(WATCH_ADD)

    try:
        watchlist.add(user, address)
    except WatchlistError as e:
        await callback.answer(e.message, show_alert=True)
        return
    except InvalidAddressFormat:
        await callback.answer(ERROR_BAD_CALLBACK)
        return

    await callback.answer(WATCHLIST_ADDED)


@router.callback_query(F.data.startswith(ALERT_SET_PREFIX))
async def handle_alert_set(
    callback: CallbackQuery,
    user: UserRecord,
    watchlist: WatchlistService,
) -> None:
    """Subscribe the user to alerts for the analysed token."""
    address = callback.data.removeprefix(ALERT_SET_PREFIX)

    try:
        created = watchlist.set_alert(user, address)
    except InvalidAddressFormat:
        await callback.answer(ERROR_BAD_CALLBACK)
        return

    await callback.answer(ALERT_SET if created else ALERT_EXISTS, show_alert=created)


@router.message(F.text & ~F.text.startswith("/"))
async def handle_text(
    message: Message,
    orchestrator: AnalysisOrchestrator,
) -> None:
    """
    Catch-all for plain text.

    Looks for an address anywhere in the text and analyses the first
    match. Text without an address is ignored.
    """
    address = extract_address(message.text)
    if address is None:
        return

    logger.debug(f"Auto-detected address {address[:8]}... in text")
    await run_analysis(message, orchestrator, address, auto_detected=True)
