"""
Tests for the daily analysis quota.

Tests cover:
- Free tier limit and denial message
- Lazy reset on a new calendar day
- Reservations: commit consumes, release gives the slot back
- Premium tiers are unlimited
"""

import pytest

from memeiq.core.exceptions import QuotaExceeded
from memeiq.core.models import Tier, UserRecord
from memeiq.services.users.quota import QuotaPolicy


@pytest.fixture
def user() -> UserRecord:
    return UserRecord(user_id=42, referral_code="MIQ16")


def _use(quota: QuotaPolicy, user: UserRecord, times: int) -> None:
    for _ in range(times):
        with quota.reserve(user) as reservation:
            reservation.commit()


class TestFreeTier:
    def test_fresh_user_has_full_quota(self, quota: QuotaPolicy, user: UserRecord) -> None:
        decision = quota.can_analyze(user)

        assert decision.allowed
        assert decision.remaining == 5
        assert decision.message is None

    def test_denied_after_limit(self, quota: QuotaPolicy, user: UserRecord) -> None:
        _use(quota, user, 5)

        decision = quota.can_analyze(user)

        assert not decision.allowed
        assert decision.remaining == 0
        assert "/upgrade" in decision.message

    def test_reserve_raises_when_exhausted(self, quota: QuotaPolicy, user: UserRecord) -> None:
        _use(quota, user, 5)

        with pytest.raises(QuotaExceeded) as exc_info:
            quota.reserve(user)

        assert "/upgrade" in exc_info.value.message
        assert user.daily_analyses == 5
        assert user.pending_analyses == 0

    def test_new_day_resets_counter(self, quota: QuotaPolicy, user: UserRecord, clock) -> None:
        _use(quota, user, 5)
        clock.advance()

        decision = quota.can_analyze(user)

        assert decision.allowed
        assert user.daily_analyses == 0
        assert user.last_analysis_date == clock.day
        assert user.total_analyses == 5

    def test_check_does_not_consume(self, quota: QuotaPolicy, user: UserRecord) -> None:
        for _ in range(10):
            quota.can_analyze(user)

        assert user.daily_analyses == 0
        assert quota.remaining(user) == 5


class TestReservation:
    def test_commit_consumes_one(self, quota: QuotaPolicy, user: UserRecord) -> None:
        with quota.reserve(user) as reservation:
            assert user.pending_analyses == 1
            reservation.commit()

        assert user.daily_analyses == 1
        assert user.total_analyses == 1
        assert user.pending_analyses == 0

    def test_uncommitted_reservation_is_released(self, quota: QuotaPolicy, user: UserRecord) -> None:
        with quota.reserve(user):
            pass

        assert user.daily_analyses == 0
        assert user.pending_analyses == 0
        assert quota.remaining(user) == 5

    def test_exception_releases_slot(self, quota: QuotaPolicy, user: UserRecord) -> None:
        with pytest.raises(RuntimeError):
            with quota.reserve(user):
                raise RuntimeError("API down")

        assert user.daily_analyses == 0
        assert user.pending_analyses == 0

    def test_double_commit_counts_once(self, quota: QuotaPolicy, user: UserRecord) -> None:
        with quota.reserve(user) as reservation:
            reservation.commit()
            reservation.commit()

        assert user.daily_analyses == 1

    def test_in_flight_reservations_count_as_used(self, quota: QuotaPolicy, user: UserRecord) -> None:
        _use(quota, user, 4)

        first = quota.reserve(user)
        with pytest.raises(QuotaExceeded):
            quota.reserve(user)

        first.commit()
        first.release()
        assert user.daily_analyses == 5
        assert user.pending_analyses == 0


class TestPremium:
    @pytest.mark.parametrize("tier", [Tier.PRO, Tier.WHALE])
    def test_unlimited(self, quota: QuotaPolicy, user: UserRecord, tier: Tier) -> None:
        user.tier = tier
        _use(quota, user, 50)

        decision = quota.can_analyze(user)

        assert decision.allowed
        assert decision.remaining is None
        assert quota.limit_for(user) is None
        assert user.daily_analyses == 50
