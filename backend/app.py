"""
FastAPI application entry point for the board backend.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.config import get_settings
from backend.dependencies import get_board_context
from backend.routes import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    ctx = get_board_context()
    if settings.seed_demo_data_on_startup:
        result = await ctx.seeder.initialize()
        if not result.success:
            logger.error("Demo data initialization failed: %s", result.error)
        await ctx.seeder.initialize_demo_users()
    yield
    ctx.sync.shutdown()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Join Board Backend (FastAPI)", version="0.1.0", lifespan=lifespan)
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()
