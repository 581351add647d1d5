"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import register_routes
from .core import ALLOWED_CORS_ORIGINS, POLLING_ENABLED, init_db, setup_logging
from .services.container import PoolServices, build_services

logger = logging.getLogger(__name__)


def create_app(services: Optional[PoolServices] = None, *, polling: bool = POLLING_ENABLED) -> FastAPI:
    """Build the API around a set of services (defaults to the environment config)."""

    if services is None:
        services = build_services()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        if services.engine is not None:
            init_db(services.engine)
        if polling:
            await services.polling.start()
        else:
            logger.info("Background polling disabled")
        try:
            yield
        finally:
            services.polling.stop()
            services.scheduler.shutdown()

    app = FastAPI(title="Golf Pool API", version="0.2.0", lifespan=lifespan)
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("golf_pool.app:app", host="127.0.0.1", port=3000, reload=True)
