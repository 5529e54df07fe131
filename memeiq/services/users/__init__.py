"""User state: store, quota policy and referrals."""

from memeiq.services.users.quota import QuotaPolicy, Reservation
from memeiq.services.users.referrals import ReferralService
from memeiq.services.users.store import UserStore

__all__ = ["UserStore", "QuotaPolicy", "Reservation", "ReferralService"]
