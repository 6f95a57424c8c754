from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

import redis.asyncio as redis
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Config
from .exceptions import BoardError, UpstreamError
from .logger import setup_logger
from .routers import boards as boards_router
from .routers import games as games_router
from .routers import legacy as legacy_router
from .routers import profiles as profiles_router
from .state import BoardServices
from .store import create_redis_client, ping

logger = logging.getLogger(__name__)


def create_app(config_class=Config, redis_factory: Optional[Callable[[object], redis.Redis]] = None) -> FastAPI:
    """Build the service.

    *redis_factory* receives the config and returns the one Redis client the
    application uses; it defaults to :func:`create_redis_client`.
    """
    config_class.validate()
    setup_logger(config_class)
    factory = redis_factory or create_redis_client

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        services = BoardServices.build(factory(config_class), config_class)
        app.state.services = services
        logger.info("Board services started")
        try:
            yield
        finally:
            await services.close()
            logger.info("Board services stopped")

    # -----------------------------
    # FastAPI app instance
    # -----------------------------

    app = FastAPI(title="Catan Boards", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config_class.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(BoardError)
    async def board_error_handler(request: Request, exc: BoardError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    # Register routers
    app.include_router(boards_router.router)
    app.include_router(games_router.router)
    app.include_router(profiles_router.router)
    app.include_router(legacy_router.router)

    @app.get("/healthz", tags=["health"])
    async def healthz(request: Request):
        try:
            await ping(request.app.state.services.client)
        except UpstreamError as e:
            return JSONResponse(status_code=e.status_code, content={"status": "unavailable"})
        return {"status": "ok"}

    return app


__all__ = ["create_app"]
