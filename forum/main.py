import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .api.v1.api import api_router
from .config import settings
from .core.exceptions import PersistenceException
from .database import get_db
from .init_db import init_database
from .services.session_sweeper import SessionSweeper

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create tables, seed bootstrap data and run the session sweeper."""
    await run_in_threadpool(init_database)

    sweeper = None
    if settings.SESSION_CLEANUP_ENABLED:
        sweeper = SessionSweeper(settings.SESSION_CLEANUP_INTERVAL_SECONDS)
        sweeper.start()

    yield

    if sweeper is not None:
        await sweeper.stop()


# Create FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)


@app.exception_handler(SQLAlchemyError)
async def persistence_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Log storage failures in full and answer with a generic 500."""
    logger.exception("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    error = PersistenceException()
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


app.include_router(api_router)


# Root endpoint
@app.get("/")
def read_root():
    return {
        "message": "Welcome to the Literary Lions Forum API",
        "version": settings.API_VERSION,
        "status": "running"
    }


# Health check endpoint
@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """API and database health check"""
    db.execute(text("SELECT 1"))
    return {"status": "healthy"}
