"""
ASGI entry point for the burst protection analytics API.

Run with `uvicorn burst_analytics.main:app` or `python -m burst_analytics.main`.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from burst_analytics import __version__
from burst_analytics.api import api_router
from burst_analytics.core.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Stateless service: nothing to open or close
    logger.info(f"{settings.app_name} {__version__} ready, row limit {settings.max_rows_per_request}")
    yield
    logger.info(f"{settings.app_name} stopped")


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    description="Daily metrics, account summaries, feature impact, KPI trends and active window timelines for the burst protection dashboard.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.get("/")
async def root():
    """Service name, version and where to find the OpenAPI docs."""
    return {
        "name": settings.app_name,
        "version": __version__,
        "docs": app.docs_url,
        "openapi": app.openapi_url,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
