"""
In-memory user store and analytics.

Holds every UserRecord and the process-wide AnalyticsSnapshot.
Constructed once at service start and injected into handlers through
the dispatcher; it is never torn down and nothing survives a restart.
"""

import logging
from collections import Counter
from datetime import date
from typing import Callable, Iterable

from memeiq.core.models import AnalyticsSnapshot, Tier, UserRecord
from memeiq.services.users.referrals import referral_code_for

logger = logging.getLogger(__name__)


class UserStore:
    """
    Process-lifetime mapping from Telegram user id to UserRecord.

    Implements the UserRepository protocol. Records are created lazily
    on first contact and never deleted.

    Usage:
        store = UserStore()
        user = store.get_or_create(message.from_user.id)
    """

    def __init__(self, today: Callable[[], date] = date.today):
        """
        Args:
            today: Clock returning the current calendar day
        """
        self._users: dict[int, UserRecord] = {}
        self._analytics = AnalyticsSnapshot()
        self._today = today

    @property
    def analytics(self) -> AnalyticsSnapshot:
        return self._analytics

    def today(self) -> date:
        return self._today()

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

    def __len__(self) -> int:
        return len(self._users)

    def get(self, user_id: int) -> UserRecord | None:
        return self._users.get(user_id)

    def users(self) -> Iterable[UserRecord]:
        return self._users.values()

    def get_or_create(self, user_id: int) -> UserRecord:
        """
        Return the user's record, creating it on first contact.

        The global user counter is incremented exactly once per new id.
        """
        record = self._users.get(user_id)
        if record is not None:
            return record

        record = UserRecord(user_id=user_id, referral_code=referral_code_for(user_id))
        self._users[user_id] = record
        self._analytics.total_users += 1
        logger.info(f"New user {user_id} (total: {self._analytics.total_users})")
        return record

    def record_activity(self, user_id: int) -> None:
        """Mark the user as active today."""
        self._analytics.for_day(self.today()).active_users.add(user_id)

    def record_command(self, user_id: int, command: str) -> None:
        """Count one use of a command and mark the user active."""
        usage = self._analytics.command_usage
        usage[command] = usage.get(command, 0) + 1
        self.record_activity(user_id)

    def record_analysis(self) -> None:
        """Count one successful analysis globally and for today."""
        self._analytics.total_analyses += 1
        self._analytics.for_day(self.today()).analyses += 1

    def set_tier(self, user_id: int, tier: Tier) -> UserRecord:
        """Change a user's tier, creating the record if needed."""
        record = self.get_or_create(user_id)
        previous = record.tier
        record.tier = tier
        logger.info(f"User {user_id} tier changed: {previous.value} -> {tier.value}")
        return record

    def tier_breakdown(self) -> dict[Tier, int]:
        """Number of users per tier."""
        counts = Counter(record.tier for record in self._users.values())
        return {tier: counts.get(tier, 0) for tier in Tier}
