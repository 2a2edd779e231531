import logging
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from datetime import datetime, timezone
from typing import Dict, Optional

from app.core.config import get_settings
from app.database import Database
from app.models.flight import Network
from app.schemas.network import ReconciliationStats
from app.services.networks.base import NetworkStrategy
from app.services.orchestration.reconciliation_orchestrator import ReconciliationOrchestrator

logger = logging.getLogger(__name__)
settings = get_settings()


class ReconciliationScheduler:
    """
    Runs the reconciliation pipeline for each network on a fixed interval
    using APScheduler. Networks have their own job and never share a
    snapshot or candidate list.
    """

    def __init__(
        self,
        database: Database,
        strategies: Dict[Network, NetworkStrategy],
        interval_seconds: Optional[int] = None
    ):
        self.database = database
        self.strategies = strategies
        self.interval_seconds = interval_seconds or settings.RECONCILIATION_INTERVAL_SECONDS
        self.scheduler = AsyncIOScheduler(timezone=timezone.utc)
        self._last_stats: Dict[Network, ReconciliationStats] = {}
        self._is_running = False

    @staticmethod
    def job_id(network: Network) -> str:
        return f"reconcile_{network.value.lower()}"

    async def start(self):
        """Start one interval job per configured network"""
        if self._is_running:
            logger.warning("Scheduler already running")
            return

        for network in self.strategies:
            self.scheduler.add_job(
                self._reconcile_job,
                trigger=IntervalTrigger(seconds=self.interval_seconds),
                args=[network],
                id=self.job_id(network),
                name=f"{network.value} flight reconciliation",
                replace_existing=True,
                max_instances=2,  # a slow cycle must not swallow the next tick
                coalesce=False,
                misfire_grace_time=self.interval_seconds
            )

        self.scheduler.start()
        self._is_running = True

        logger.info(
            f"Reconciliation scheduler started with {self.interval_seconds}s interval",
            extra={"networks": [network.value for network in self.strategies]}
        )

    async def stop(self):
        """Stop the scheduler"""
        if not self._is_running:
            logger.warning("Scheduler not running")
            return

        self.scheduler.shutdown(wait=False)
        self._is_running = False
        logger.info("Reconciliation scheduler stopped")

    async def run_cycle(self, network: Network) -> ReconciliationStats:
        """Run one cycle for a network; errors propagate to the caller"""
        orchestrator = ReconciliationOrchestrator(self.database, self.strategies[network])
        stats = await orchestrator.reconcile()
        self._last_stats[network] = stats
        return stats

    async def _reconcile_job(self, network: Network):
        """Internal job method called by scheduler; never raises"""
        try:
            await self.run_cycle(network)
        except Exception as e:
            self._last_stats[network] = ReconciliationStats(network=network, error=str(e))
            logger.error(
                f"Error in {network.value} reconciliation job: {str(e)}",
                extra={"network": network.value},
                exc_info=True
            )

    async def trigger_manual_sync(self, network: Network) -> dict:
        """
        Manually trigger a cycle outside the schedule.
        Useful for API endpoints or admin actions.

        Returns:
            Sync statistics dictionary
        """
        logger.info(f"Manual {network.value} reconciliation triggered")

        if network not in self.strategies:
            return {
                "status": "error",
                "error": f"{network.value} reconciliation is disabled",
                "triggered_at": datetime.now(timezone.utc).isoformat()
            }

        try:
            stats = await self.run_cycle(network)
            return {
                "status": "success" if stats.succeeded else "error",
                "triggered_at": datetime.now(timezone.utc).isoformat(),
                **stats.model_dump(mode="json")
            }
        except Exception as e:
            logger.error(f"Error in manual {network.value} reconciliation: {str(e)}", exc_info=True)
            return {
                "status": "error",
                "error": str(e),
                "triggered_at": datetime.now(timezone.utc).isoformat()
            }

    def get_next_run_time(self, network: Network) -> Optional[str]:
        """
        Get the next scheduled run time for a network.

        Returns:
            ISO datetime string of next run, or None if not scheduled
        """
        if not self._is_running:
            return None
        job = self.scheduler.get_job(self.job_id(network))
        if job:
            next_run = job.next_run_time
            return next_run.isoformat() if next_run else None
        return None

    def get_last_stats(self, network: Network) -> Optional[ReconciliationStats]:
        return self._last_stats.get(network)

    @property
    def running(self) -> bool:
        return self._is_running

    def get_status(self) -> dict:
        """
        Get scheduler status information.

        Returns:
            Status dictionary
        """
        networks = {}
        for network in self.strategies:
            last = self._last_stats.get(network)
            networks[network.value] = {
                "job_id": self.job_id(network),
                "next_run": self.get_next_run_time(network),
                "last_run": last.model_dump(mode="json") if last else None
            }

        return {
            "running": self._is_running,
            "interval_seconds": self.interval_seconds,
            "networks": networks
        }
