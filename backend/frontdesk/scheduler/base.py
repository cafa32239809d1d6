"""
Scheduler backend interface

Periodic jobs (the auto-checkout sweep) are registered through
ISchedulerBackend; the routes reach the running backend through
SchedulerRegistry and never import a scheduling library themselves.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional


class ISchedulerBackend(ABC):
    """Scheduler backend interface"""

    @abstractmethod
    def add_job(
        self,
        job_id: str,
        func: Callable,
        trigger: str,
        **trigger_args,
    ) -> None:
        """Register `func` under `job_id`, replacing any job with that id

        Args:
            job_id: unique job id
            func: callable to run
            trigger: 'interval', 'cron' or 'date'
            **trigger_args: trigger arguments (e.g. minutes=5)
        """

    @abstractmethod
    def get_jobs(self) -> List[Dict]:
        """Scheduled jobs as dicts of id, name, trigger, next_run_time"""

    @abstractmethod
    def run_now(self, job_id: str) -> Any:
        """Run a job's callable once in the calling thread and return its result

        Raises:
            NotFoundError: no job is registered under `job_id`
        """


class SchedulerRegistry:
    """Holds the running backend - singleton

    Set in the application lifespan when auto-checkout is enabled:
        SchedulerRegistry().set_backend(APSchedulerBackend())
    """

    _instance: Optional["SchedulerRegistry"] = None

    def __new__(cls) -> "SchedulerRegistry":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._backend = None
        return cls._instance

    def set_backend(self, backend: ISchedulerBackend) -> None:
        self._backend = backend

    def get_backend(self) -> Optional[ISchedulerBackend]:
        return self._backend

    def clear(self) -> None:
        self._backend = None
