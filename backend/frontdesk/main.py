"""
Front desk application entry point
Rooms, guests, bookings, kitchen/bar orders, receipts and reports
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from frontdesk import __version__
from frontdesk.config import settings
from frontdesk.database import init_db
from frontdesk.exception_handler import setup_exception_handlers
from frontdesk.routers import (
    auth, staff, rooms, guests, bookings, orders, drinks, reports, receipts, auto_checkout
)
from frontdesk.scheduler.base import SchedulerRegistry

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle

    Startup: tables, then the auto-checkout job (first
    sweep runs immediately). Shutdown: stop the scheduler.
    """
    init_db()

    backend = None
    if settings.AUTO_CHECKOUT_ENABLED:
        from frontdesk.scheduler.apscheduler_backend import APSchedulerBackend
        from frontdesk.services.auto_checkout_service import schedule_auto_checkout

        backend = APSchedulerBackend()
        SchedulerRegistry().set_backend(backend)
        schedule_auto_checkout(backend)
        backend.start()
        logger.info(
            f"Auto-checkout scheduled every {settings.AUTO_CHECKOUT_INTERVAL_MINUTES} minutes"
        )

    yield

    if backend is not None:
        backend.shutdown()
        SchedulerRegistry().clear()


# Create the application
app = FastAPI(
    title=settings.APP_NAME,
    description="Hotel front desk: rooms, guests, bookings, kitchen and bar orders",
    version=__version__,
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

# Routers
app.include_router(auth.router)
app.include_router(staff.router)
app.include_router(rooms.router)
app.include_router(guests.router)
app.include_router(bookings.router)
app.include_router(orders.kitchen_router)
app.include_router(orders.bar_router)
app.include_router(drinks.router)
app.include_router(reports.router)
app.include_router(receipts.router)
app.include_router(auto_checkout.router)


@app.get("/")
def root():
    return {
        "name": settings.APP_NAME,
        "hotel": settings.HOTEL_NAME,
        "version": __version__,
    }


@app.get("/health")
def health_check():
    """Health check"""
    return {"status": "healthy"}
