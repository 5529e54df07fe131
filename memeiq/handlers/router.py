"""
Router setup and configuration.

Registers all handlers, middleware and shared services with the
dispatcher. Order matters - command handlers are registered before
the free text catch-all.
"""

from aiogram import Dispatcher

from memeiq.config.settings import Settings
from memeiq.handlers import account_handler, admin_handler, common_handler, token_handler
from memeiq.middleware import AnalyticsMiddleware, ErrorHandlerMiddleware, LoggingMiddleware
from memeiq.services.factory import ServiceFactory


def setup_routers(
    dp: Dispatcher,
    settings: Settings,
    factory: ServiceFactory,
) -> None:
    """
    Configure dispatcher with all routers and middleware.

    Sets up:
    1. Global middleware (logging, error handling, user context)
    2. Shared services as handler arguments
    3. Command and callback handlers
    4. Free text handler (catch-all)

    Args:
        dp: Aiogram dispatcher
        settings: Application configuration
        factory: Service factory holding the shared store
    """
    # Register middleware (order: first registered = outermost)
    # Logging is outermost to time every request including errors,
    # analytics is innermost so handler errors are caught around it
    dp.update.middleware(LoggingMiddleware())
    dp.update.middleware(ErrorHandlerMiddleware())
    dp.update.middleware(AnalyticsMiddleware(factory.store))

    # Workflow data: available as handler arguments by name
    dp["settings"] = settings
    dp["store"] = factory.store
    dp["quota"] = factory.quota
    dp["orchestrator"] = factory.create_orchestrator()
    dp["watchlist"] = factory.create_watchlist_service()
    dp["referrals"] = factory.create_referral_service()

    # Commands first, the free text token handler last
    dp.include_router(common_handler.router)
    dp.include_router(account_handler.router)
    dp.include_router(admin_handler.router)
    dp.include_router(token_handler.router)
