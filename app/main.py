"""
FastAPI application entry point.
Challenge: Mount routes, middleware (Prometheus), startup events (ES index bootstrap).
"""

import logging
from contextlib import asynccontextmanager

from elasticsearch import ApiError, TransportError
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from app.config import get_settings
from app.api.router import api_router
from app.core.exceptions import register_exception_handlers
from app.search.elasticsearch_client import close_elasticsearch, ensure_products_index, get_elasticsearch

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: ensure the products index when ES is available. Shutdown: close the client."""
    settings = get_settings()
    try:
        await ensure_products_index(await get_elasticsearch(), settings.elasticsearch_index)
    except (ApiError, TransportError) as exc:
        # ES may be down at boot; /test reports it and writes fail until it is back
        logger.warning("Could not ensure index %r: %s", settings.elasticsearch_index, exc)
    yield
    await close_elasticsearch()


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(
        title=settings.app_name,
        description="Product catalog indexing, search and autocomplete backed by Elasticsearch.",
        version="1.0.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # CORS for frontend/API consumers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus metrics at /metrics
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


app = create_app()
