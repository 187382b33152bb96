"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from journal.config import settings
from journal.database import create_db_and_tables
from journal.errors import StorageError
from journal.utils.logging import setup_logging
from journal.api import calculator, dashboard, drafts, export, profile, system, trades

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    setup_logging()
    create_db_and_tables()
    logger.info("Trading journal ready")
    yield


app = FastAPI(
    title="Trading Journal",
    description="Single-user forex/gold/crypto trading journal",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": f"Storage unavailable: {exc}"})


# Mount routers
app.include_router(trades.router)
app.include_router(dashboard.router)
app.include_router(calculator.router)
app.include_router(drafts.router)
app.include_router(profile.router)
app.include_router(export.router)
app.include_router(system.router)
