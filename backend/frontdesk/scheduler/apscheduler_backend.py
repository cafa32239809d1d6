"""
APScheduler backend - a BackgroundScheduler behind ISchedulerBackend
"""
import logging
from typing import Any, Callable, Dict, List, Optional

from apscheduler.schedulers.background import BackgroundScheduler

from frontdesk.errors import NotFoundError
from frontdesk.scheduler.base import ISchedulerBackend

logger = logging.getLogger(__name__)


class APSchedulerBackend(ISchedulerBackend):
    """Jobs run on the scheduler's worker thread, one instance at a time"""

    def __init__(self, scheduler: Optional[BackgroundScheduler] = None):
        self._scheduler = scheduler or BackgroundScheduler()

    def start(self) -> None:
        if not self._scheduler.running:
            self._scheduler.start()
            logger.info("Scheduler started")

    def shutdown(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("Scheduler stopped")

    def add_job(
        self,
        job_id: str,
        func: Callable,
        trigger: str,
        **trigger_args,
    ) -> None:
        # a missed or overrunning tick collapses into the next one
        self._scheduler.add_job(
            func,
            trigger=trigger,
            id=job_id,
            replace_existing=True,
            coalesce=True,
            max_instances=1,
            **trigger_args,
        )
        logger.info(f"Job scheduled: {job_id} ({trigger})")

    def get_jobs(self) -> List[Dict]:
        return [
            {
                "id": job.id,
                "name": job.name or job.id,
                "trigger": str(job.trigger),
                "next_run_time": job.next_run_time.isoformat() if job.next_run_time else None,
            }
            for job in self._scheduler.get_jobs()
        ]

    def run_now(self, job_id: str) -> Any:
        job = self._scheduler.get_job(job_id)
        if job is None:
            raise NotFoundError(f"No scheduled job '{job_id}'")
        logger.info(f"Running job on demand: {job_id}")
        return job.func()
