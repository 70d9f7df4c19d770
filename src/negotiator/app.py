"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from negotiator.api.carriers import router as carriers_router
from negotiator.api.chat import router as chat_router
from negotiator.api.exceptions import register_exception_handlers
from negotiator.api.models import HealthResponse
from negotiator.configs.config import AppConfig, get_app_config
from negotiator.core.service.metrics import setup_metrics
from negotiator.infra.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown events."""
    base_dir = app.state.config.catalog.base_dir
    if not base_dir.is_dir():
        logger.warning("Carrier catalog directory %s does not exist", base_dir)
    logger.info("Starting negotiator, catalog at %s", base_dir)

    yield

    logger.info("Shutting down negotiator")


def get_app(config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if config is None:
        config = get_app_config()

    app = FastAPI(
        title="Negotiator",
        description="Carrier rates negotiation chat grounded in indexed documents",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    setup_metrics(app, config.metrics)

    app.include_router(carriers_router)
    app.include_router(chat_router)

    @app.get("/health")
    async def health() -> HealthResponse:
        return HealthResponse()

    return app


app = get_app()


def main() -> None:
    """Run the API server with uvicorn (``negotiator`` console script)."""
    config = get_app_config()
    setup_logging(config.logging)
    uvicorn.run(
        "negotiator.app:app",
        host=config.api.host,
        port=config.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
