from fastapi import APIRouter

from .endpoints import control, health, metrics

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(metrics.router)
api_router.include_router(control.router)
