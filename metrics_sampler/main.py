import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from metrics_sampler import __version__
from metrics_sampler.api.router import api_router
from metrics_sampler.collection.sampler import Sampler
from metrics_sampler.core.config import settings
from metrics_sampler.core.logger import get_logger
from metrics_sampler.startup import initialize_application

from shared.constants.endpoints import Endpoints

logger = get_logger("sampler.main")


def create_app(sampler: Sampler | None = None) -> FastAPI:
    """Build the transport around a single long-lived Sampler.

    The sampler is created in the lifespan unless one is handed in, stored on
    ``app.state.sampler`` and stopped on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        initialize_application()
        app.state.started_at = time.time()
        app.state.sampler = (
            sampler if sampler is not None else Sampler(interval_ms=settings.interval_ms)
        )
        app.state.sampler.start()
        try:
            yield
        finally:
            logger.info("sampler_service_stopping")
            await app.state.sampler.stop()

    app = FastAPI(
        title="Workflow Metrics Sampler", version=__version__, lifespan=lifespan
    )
    app.include_router(api_router)

    @app.get(Endpoints.PROMETHEUS)
    def prometheus():
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


app = create_app()


def run() -> None:
    config = uvicorn.Config(
        app,
        host=settings.metrics_server_host,
        port=settings.metrics_server_port,
        log_config=None,
    )
    server = uvicorn.Server(config)
    app.state.server = server
    server.run()
