from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wellness.api.content import router as content_router
from wellness.api.courses import router as courses_router
from wellness.api.favorites import router as favorites_router
from wellness.api.health import router as health_router
from wellness.api.metrics_endpoint import router as metrics_router
from wellness.api.reviews import router as reviews_router
from wellness.core.config import SETTINGS
from wellness.core.logging import setup_logging
from wellness.db.engine import async_session_factory, lifespan_db
from wellness.middleware.metrics import MetricsMiddleware
from wellness.middleware.request_context import RequestContextMiddleware
from wellness.repos.bundle import IN_MEMORY
from wellness.repos.seed import seed_sample_content

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    async with lifespan_db():
        if SETTINGS.is_dev and async_session_factory is None:
            await seed_sample_content(IN_MEMORY)
        yield


app = FastAPI(
    title="wellness-api",
    lifespan=lifespan,
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Last-added runs first: RequestContext (outermost) -> Metrics -> CORS -> route.
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(courses_router)
app.include_router(content_router)
app.include_router(reviews_router)
app.include_router(favorites_router)

logger.info(
    "wellness-api started  env=%s log_level=%s port=%d docs=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    "on" if SETTINGS.is_dev else "off",
)
