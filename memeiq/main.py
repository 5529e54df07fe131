"""
MemeIQ bot entry point.

Wires settings, services, the aiogram dispatcher and the background
jobs together, then long-polls Telegram until interrupted.

Run with: python -m memeiq.main  (or the memeiq-bot console script)
"""

import asyncio
import logging
import sys

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.types import BotCommand

from memeiq import __version__
from memeiq.config import Settings, get_settings
from memeiq.handlers import setup_routers
from memeiq.services.factory import ServiceFactory
from memeiq.services.scheduler import BackgroundScheduler

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

BOT_COMMANDS = [
    BotCommand(command="analyze", description="Full token analysis"),
    BotCommand(command="quick", description="Short token summary"),
    BotCommand(command="watchlist", description="Your watched tokens"),
    BotCommand(command="stats", description="Your usage and referral link"),
    BotCommand(command="trending", description="Trending tokens"),
    BotCommand(command="upgrade", description="Plans and limits"),
    BotCommand(command="help", description="How to use MemeIQ"),
]


def setup_logging(level: str) -> None:
    """
    Send all log records to stdout in one line format.

    Args:
        level: Root log level name (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )

    # Library chatter only above WARNING
    for name in ("aiogram", "aiohttp"):
        logging.getLogger(name).setLevel(logging.WARNING)


def validate_production_config(settings: Settings) -> None:
    """
    Refuse to go live with a development-only configuration.

    Raises:
        RuntimeError: If the production configuration is unusable.
    """
    if not settings.is_production:
        return

    problems = []
    if settings.use_mock_services:
        problems.append("USE_MOCK_SERVICES must be false")
    if not settings.api_base_url.startswith("https://"):
        problems.append("API_BASE_URL must be an https:// URL")
    if not settings.admin_id_set:
        logger.warning("ADMIN_IDS is empty, /admin is disabled")

    if problems:
        raise RuntimeError(f"Invalid production config: {'; '.join(problems)}.")


def create_bot(settings: Settings) -> Bot:
    """Bot client replying in HTML without link previews."""
    return Bot(
        token=settings.telegram_bot_token,
        default=DefaultBotProperties(
            parse_mode=ParseMode.HTML,
            link_preview_is_disabled=True,
        ),
    )


def create_dispatcher(
    bot: Bot,
    settings: Settings,
    factory: ServiceFactory,
    scheduler: BackgroundScheduler,
) -> Dispatcher:
    """Dispatcher with routers, middleware and lifecycle hooks attached."""
    dp = Dispatcher()
    setup_routers(dp, settings, factory)

    async def on_startup() -> None:
        await bot.set_my_commands(BOT_COMMANDS)
        scheduler.start()

    async def on_shutdown() -> None:
        logger.info("Shutdown requested, stopping background jobs")
        await scheduler.stop()
        await bot.session.close()

    dp.startup.register(on_startup)
    dp.shutdown.register(on_shutdown)
    return dp


async def main() -> None:
    settings = get_settings()

    # Before validation, so config problems reach the log
    setup_logging(settings.log_level)
    validate_production_config(settings)

    logger.info(
        f"MemeIQ bot v{__version__} | env={settings.environment} "
        f"| mock={settings.use_mock_services} | api={settings.api_base_url}"
    )

    factory = ServiceFactory(settings)
    scheduler = factory.create_scheduler()
    bot = create_bot(settings)
    dp = create_dispatcher(bot, settings, factory, scheduler)

    logger.info("Polling for updates")
    try:
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
    except Exception as e:
        logger.exception(f"Polling crashed: {e}")
        raise
    finally:
        logger.info("MemeIQ bot stopped")


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")


if __name__ == "__main__":
    run()
