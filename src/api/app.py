"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.config import get_config
from src.data.store import PetStore
from src.matching.finder import MatchFinder
from src.vision.roboflow_client import VisionProvider, create_vision_provider

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize shared resources on startup, clean up on shutdown.

    Creates the listing store, match finder and vision client shared
    across all requests.
    """
    config = get_config()

    app.state.config = config
    app.state.store = PetStore.seeded()
    app.state.finder = MatchFinder(app.state.store)
    vision: VisionProvider = create_vision_provider(config)
    app.state.vision = vision
    logger.info("Vision backend: %s", "mock" if vision.is_mock else "roboflow")

    yield

    vision.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="Lost & Found Pet Matching",
        description="Match lost and found pet listings and analyze pet photos",
        version="0.1.0",
        lifespan=lifespan,
    )

    from src.api.routes import router

    app.include_router(router)

    return app
