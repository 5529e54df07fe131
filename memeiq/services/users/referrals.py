"""
Referral program.

Every user gets a referral code derived from their Telegram id, so no
lookup table is needed to resolve a code back to its owner. A new user
starting the bot through someone's link is linked to that referrer once.
"""

import logging
import string

from memeiq.core.models import UserRecord
from memeiq.core.protocols import UserRepository

logger = logging.getLogger(__name__)

CODE_PREFIX = "MIQ"
_DIGITS = string.digits + string.ascii_uppercase


def referral_code_for(user_id: int) -> str:
    """
    Deterministic referral code for a user id.

    Examples:
        >>> referral_code_for(123456789)
        'MIQ21I3V9'
    """
    value = abs(user_id)
    encoded = ""
    while True:
        value, remainder = divmod(value, 36)
        encoded = _DIGITS[remainder] + encoded
        if value == 0:
            break
    return f"{CODE_PREFIX}{encoded}"


def parse_referral_code(code: str | None) -> int | None:
    """Resolve a referral code back to a user id, None if malformed."""
    if not code:
        return None
    code = code.strip().upper()
    if not code.startswith(CODE_PREFIX) or len(code) == len(CODE_PREFIX):
        return None
    try:
        return int(code[len(CODE_PREFIX) :], 36)
    except ValueError:
        return None


class ReferralService:
    """
    Links new users to the user who invited them.

    Usage:
        service = ReferralService(store, bot_username="MemeIQBot")
        referrer = service.apply(new_user, "MIQ21I3V9")
    """

    def __init__(self, store: UserRepository, bot_username: str):
        self._store = store
        self._bot_username = bot_username.lstrip("@")

    def link_for(self, user: UserRecord) -> str:
        """Deep link that starts the bot with the user's code."""
        return f"https://t.me/{self._bot_username}?start={user.referral_code}"

    def apply(self, user: UserRecord, code: str | None) -> UserRecord | None:
        """
        Record that ``user`` was referred by the owner of ``code``.

        Ignored when the user already has a referrer, the code is
        malformed or unknown, or the code is the user's own.

        Returns:
            The referrer's record when the referral was applied, else None
        """
        if user.referred_by is not None:
            return None

        referrer_id = parse_referral_code(code)
        if referrer_id is None or referrer_id == user.user_id:
            return None

        referrer = self._store.get(referrer_id)
        if referrer is None:
            logger.debug(f"Unknown referral code: {code}")
            return None

        user.referred_by = referrer.user_id
        referrer.referrals.add(user.user_id)
        logger.info(f"User {user.user_id} referred by {referrer.user_id}")
        return referrer
