"""
Periodic background jobs.

Three fixed-interval loops share the bot's event loop:
- alert sweep: reports how many alert subscriptions exist
- daily stats: logs today's analytics
- heartbeat: logs uptime so a stuck process is visible in the logs

Jobs are synchronous bookkeeping only; they never block on I/O.
"""

import asyncio
import logging
import time
from datetime import date
from typing import Callable

from memeiq.services.users.store import UserStore

logger = logging.getLogger(__name__)


class BackgroundScheduler:
    """
    Runs the periodic jobs as asyncio tasks.

    Usage:
        scheduler = BackgroundScheduler(store)
        scheduler.start()
        ...
        await scheduler.stop()
    """

    def __init__(
        self,
        store: UserStore,
        alert_interval: float = 300,
        stats_interval: float = 3600,
        heartbeat_interval: float = 600,
        today: Callable[[], date] = date.today,
    ):
        self._store = store
        self._today = today
        self._started_at = time.monotonic()
        self._jobs: dict[str, tuple[float, Callable[[], object]]] = {
            "alert_sweep": (alert_interval, self.sweep_alerts),
            "daily_stats": (stats_interval, self.log_daily_stats),
            "heartbeat": (heartbeat_interval, self.heartbeat),
        }
        self._tasks: list[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    def start(self) -> None:
        """Schedule every job on the running event loop."""
        if self.running:
            return
        self._started_at = time.monotonic()
        self._tasks = [
            asyncio.create_task(self._run(name, interval, job), name=f"memeiq-{name}")
            for name, (interval, job) in self._jobs.items()
        ]
        logger.info(f"Background jobs started: {', '.join(self._jobs)}")

    async def stop(self) -> None:
        """Cancel all jobs and wait for them to finish."""
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        logger.info("Background jobs stopped")

    async def _run(self, name: str, interval: float, job: Callable[[], object]) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                job()
            except Exception as e:
                logger.exception(f"Background job {name} failed: {e}")

    def sweep_alerts(self) -> int:
        """
        Count alert subscriptions.

        Alerts are not evaluated against market data.

        Returns:
            Number of active alert subscriptions
        """
        users_with_alerts = [user for user in self._store.users() if user.alerts]
        total = sum(len(user.alerts) for user in users_with_alerts)
        logger.info(f"Alert sweep: {total} alerts across {len(users_with_alerts)} users")
        return total

    def log_daily_stats(self) -> None:
        analytics = self._store.analytics
        day = analytics.daily.get(self._today())
        logger.info(
            f"Daily stats: users={analytics.total_users}, "
            f"analyses_total={analytics.total_analyses}, "
            f"analyses_today={day.analyses if day else 0}, "
            f"active_today={len(day.active_users) if day else 0}"
        )

    def heartbeat(self) -> None:
        uptime = int(time.monotonic() - self._started_at)
        logger.info(f"Heartbeat: alive, uptime {uptime // 3600}h {uptime % 3600 // 60}m")
