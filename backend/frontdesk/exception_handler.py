"""
Exception handlers
Service errors carry their own status code; store failures become 503
"""
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from frontdesk.errors import FrontDeskError, StoreError

logger = logging.getLogger(__name__)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(FrontDeskError)
    async def frontdesk_exception_handler(request: Request, exc: FrontDeskError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(content={"detail": exc.message}, status_code=exc.status_code)

    @app.exception_handler(SQLAlchemyError)
    async def store_exception_handler(request: Request, exc: SQLAlchemyError):
        # get_db closes the request session, which rolls back the failed transaction
        logger.exception(f"Store error on {request.method} {request.url.path}")
        error = StoreError("The store could not complete the request, please try again")
        return JSONResponse(content={"detail": error.message}, status_code=error.status_code)
