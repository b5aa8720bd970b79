from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from gateway.app.composition import create_gateway_dependencies
from gateway.app.config.settings import Settings
from gateway.app.core import SERVICE_NAME
from gateway.app.routers.health import health_router
from gateway.app.routers.redis import redis_router
from gateway.app.routers.utils import register_error_handlers


def create_app(settings: Settings | None = None) -> FastAPI:
    _settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.bind(service_name=SERVICE_NAME, event="gateway_starting", store_backend=_settings.store_backend).info("")
        dependencies = create_gateway_dependencies(_settings)
        app.state.settings = dependencies.settings
        app.state.session = dependencies.session
        app.state.ping_timer = dependencies.ping_timer
        try:
            yield
        finally:
            logger.bind(service_name=SERVICE_NAME, event="gateway_stopping").info("")
            await dependencies.close()

    app = FastAPI(
        title="Redis Gateway",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(redis_router)
    return app


app = create_app()


def run() -> None:
    settings = Settings()
    logger.bind(service_name=SERVICE_NAME, event="gateway_listening", host=settings.host, port=settings.port).info("")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
