"""
Tests for frontdesk.scheduler - registry and the APScheduler backend
"""
import pytest
from unittest.mock import MagicMock

from apscheduler.schedulers.background import BackgroundScheduler

from frontdesk.errors import NotFoundError
from frontdesk.scheduler.apscheduler_backend import APSchedulerBackend
from frontdesk.scheduler.base import ISchedulerBackend, SchedulerRegistry


@pytest.fixture
def backend():
    backend = APSchedulerBackend(BackgroundScheduler())
    backend.start()
    yield backend
    backend.shutdown()


@pytest.fixture(autouse=True)
def clean_registry():
    SchedulerRegistry().clear()
    yield
    SchedulerRegistry().clear()


class TestSchedulerRegistry:

    def test_singleton(self):
        assert SchedulerRegistry() is SchedulerRegistry()

    def test_set_and_get_backend(self, backend):
        SchedulerRegistry().set_backend(backend)

        assert SchedulerRegistry().get_backend() is backend
        assert isinstance(backend, ISchedulerBackend)

    def test_empty_by_default(self):
        assert SchedulerRegistry().get_backend() is None


class TestAPSchedulerBackend:

    def test_add_and_list_jobs(self, backend):
        backend.add_job("sweep", lambda: "done", "interval", minutes=5, name="Sweep")

        jobs = backend.get_jobs()
        assert [j["id"] for j in jobs] == ["sweep"]
        assert jobs[0]["name"] == "Sweep"
        assert "interval" in jobs[0]["trigger"]
        assert jobs[0]["next_run_time"] is not None

    def test_same_id_replaces_the_job(self, backend):
        backend.add_job("sweep", lambda: 1, "interval", minutes=5)
        backend.add_job("sweep", lambda: 2, "interval", minutes=10)

        assert len(backend.get_jobs()) == 1
        assert backend.run_now("sweep") == 2

    def test_run_unknown_job(self, backend):
        with pytest.raises(NotFoundError, match="No scheduled job 'missing'"):
            backend.run_now("missing")

    def test_start_and_shutdown(self):
        scheduler = MagicMock()
        scheduler.running = False
        backend = APSchedulerBackend(scheduler)

        backend.start()
        scheduler.start.assert_called_once()

        scheduler.running = True
        backend.shutdown()
        scheduler.shutdown.assert_called_once_with(wait=False)
