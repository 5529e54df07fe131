"""
Daily analysis quota.

Free users get a fixed number of analyses per calendar day, pro and
whale users are unlimited. The daily counter is reset lazily the first
time a record is touched on a new day.

Check and increment happen in one step: ``reserve`` checks the quota and
takes an in-flight slot without yielding to the event loop, so two
concurrent requests from the same user cannot both squeeze past the
limit. A reservation is only converted into a consumed analysis by
``commit``; leaving it uncommitted gives the slot back, so failed API
calls never use up quota.
"""

import logging
from datetime import date
from typing import Callable

from memeiq.core.exceptions import QuotaExceeded
from memeiq.core.models import QuotaDecision, UserRecord

logger = logging.getLogger(__name__)

DEFAULT_FREE_DAILY_LIMIT = 5


class Reservation:
    """
    One in-flight analysis slot.

    Usage:
        with policy.reserve(user) as reservation:
            token = await client.analyze(address)
            reservation.commit()
    """

    def __init__(self, policy: "QuotaPolicy", record: UserRecord):
        self._policy = policy
        self._record = record
        self._released = False
        self.committed = False

    def __enter__(self) -> "Reservation":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def commit(self) -> None:
        """Consume the slot: today's and the lifetime counter go up by one."""
        if self.committed:
            return
        self.release()
        self._policy.reset_if_new_day(self._record)
        self._record.daily_analyses += 1
        self._record.total_analyses += 1
        self.committed = True

    def release(self) -> None:
        """Give the in-flight slot back. Safe to call more than once."""
        if self._released:
            return
        self._record.pending_analyses = max(0, self._record.pending_analyses - 1)
        self._released = True


class QuotaPolicy:
    """
    Decides whether a user may run another analysis today.

    Args:
        free_daily_limit: Analyses per day for the free tier
        today: Clock returning the current calendar day
    """

    def __init__(
        self,
        free_daily_limit: int = DEFAULT_FREE_DAILY_LIMIT,
        today: Callable[[], date] = date.today,
    ):
        self._free_daily_limit = free_daily_limit
        self._today = today

    @property
    def free_daily_limit(self) -> int:
        return self._free_daily_limit

    def limit_for(self, record: UserRecord) -> int | None:
        """Daily limit for the user's tier (None = unlimited)."""
        return None if record.is_premium else self._free_daily_limit

    def reset_if_new_day(self, record: UserRecord) -> bool:
        """
        Zero the daily counter when the calendar day changed.

        Returns:
            True if the counter was reset
        """
        today = self._today()
        if record.last_analysis_date == today:
            return False

        if record.daily_analyses:
            logger.debug(
                f"Daily quota reset for user {record.user_id} "
                f"({record.daily_analyses} used on {record.last_analysis_date})"
            )
        record.daily_analyses = 0
        record.last_analysis_date = today
        return True

    def remaining(self, record: UserRecord) -> int | None:
        """Analyses left today (None = unlimited)."""
        self.reset_if_new_day(record)
        limit = self.limit_for(record)
        if limit is None:
            return None
        used = record.daily_analyses + record.pending_analyses
        return max(0, limit - used)

    def can_analyze(self, record: UserRecord) -> QuotaDecision:
        """
        Check the quota without consuming it.

        In-flight reservations count as used.
        """
        remaining = self.remaining(record)
        if remaining is None:
            return QuotaDecision(allowed=True)

        if remaining > 0:
            return QuotaDecision(allowed=True, remaining=remaining)

        return QuotaDecision(
            allowed=False,
            remaining=0,
            message=(
                "⛔ <b>Daily limit reached</b>\n\n"
                f"Free accounts get {self._free_daily_limit} analyses per day. "
                "Your quota resets tomorrow.\n\n"
                "Use /upgrade for unlimited analyses."
            ),
        )

    def reserve(self, record: UserRecord) -> Reservation:
        """
        Atomically check the quota and take an in-flight slot.

        Raises:
            QuotaExceeded: If the user has no analyses left today
        """
        decision = self.can_analyze(record)
        if not decision.allowed:
            raise QuotaExceeded(
                message=decision.message,
                technical_message=(
                    f"User {record.user_id} hit daily limit "
                    f"({record.daily_analyses}/{self._free_daily_limit})"
                ),
            )

        record.pending_analyses += 1
        return Reservation(self, record)
