"""
Scheduler interface and its APScheduler implementation
"""
from frontdesk.scheduler.base import ISchedulerBackend, SchedulerRegistry

__all__ = ["ISchedulerBackend", "SchedulerRegistry"]
