"""
Watchlist and alert subscriptions.

Plain bookkeeping on the UserRecord. Alerts are only stored; nothing
evaluates them against live market data, the periodic sweep just
reports how many exist.
"""

import logging

from memeiq.core.exceptions import InvalidAddressFormat, WatchlistError
from memeiq.core.models import UserRecord
from memeiq.utils.validators import validate_solana_address

logger = logging.getLogger(__name__)

DEFAULT_FREE_WATCHLIST_LIMIT = 5


class WatchlistService:
    """
    Adds and removes watched tokens and alert subscriptions.

    Free users can watch a limited number of tokens, pro and whale
    users are unlimited.
    """

    def __init__(self, free_limit: int = DEFAULT_FREE_WATCHLIST_LIMIT):
        self._free_limit = free_limit

    def limit_for(self, user: UserRecord) -> int | None:
        """Watchlist capacity for the user's tier (None = unlimited)."""
        return None if user.is_premium else self._free_limit

    def add(self, user: UserRecord, address: str) -> None:
        """
        Append a token to the user's watchlist.

        Raises:
            InvalidAddressFormat: Address fails the format check
            WatchlistError: Already watched, or free tier watchlist is full
        """
        _check_address(address)

        if address in user.watchlist:
            raise WatchlistError(
                message="ℹ️ This token is already in your watchlist.",
                technical_message=f"Duplicate watchlist entry for user {user.user_id}",
            )

        limit = self.limit_for(user)
        if limit is not None and len(user.watchlist) >= limit:
            raise WatchlistError(
                message=(
                    f"⛔ Your watchlist is full ({limit} tokens on the free tier).\n"
                    "Remove a token or use /upgrade for an unlimited watchlist."
                ),
                technical_message=f"Watchlist full for user {user.user_id}",
            )

        user.watchlist.append(address)
        logger.info(f"User {user.user_id} watching {address[:8]} ({len(user.watchlist)} total)")

    def remove(self, user: UserRecord, address: str) -> bool:
        """
        Drop a token and its alert from the user's watchlist.

        Returns:
            True if the token was watched
        """
        if address in user.alerts:
            user.alerts.remove(address)

        if address not in user.watchlist:
            return False

        user.watchlist.remove(address)
        logger.info(f"User {user.user_id} stopped watching {address[:8]}")
        return True

    def set_alert(self, user: UserRecord, address: str) -> bool:
        """
        Subscribe the user to alerts for a token.

        Returns:
            True if the subscription is new

        Raises:
            InvalidAddressFormat: Address fails the format check
        """
        _check_address(address)

        if address in user.alerts:
            return False

        user.alerts.append(address)
        logger.info(f"User {user.user_id} set alert for {address[:8]}")
        return True


def _check_address(address: str) -> None:
    is_valid, error = validate_solana_address(address)
    if not is_valid:
        raise InvalidAddressFormat(technical_message=f"Watchlist address rejected: {error}")
