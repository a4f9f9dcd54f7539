"""
Health checks - for load balancers, Kubernetes, and monitoring.
Challenge: Fast liveness; engine reachability as a separate probe.
"""

from fastapi import APIRouter

from app.core.dependencies import AppSettings, ProductServiceDep
from app.core.exceptions import problem

router = APIRouter()


@router.get("/health")
async def health(settings: AppSettings):
    """Liveness: is the process up?"""
    return {"status": "ok", "app": settings.app_name}


@router.get("/test")
async def engine_health(service: ProductServiceDep):
    """Is Elasticsearch reachable?"""
    if await service.ping():
        return "Elasticsearch is UP"
    return problem("Elasticsearch is DOWN")
