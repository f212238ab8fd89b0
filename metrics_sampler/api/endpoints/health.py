import time

from fastapi import APIRouter, Depends, Request, Response

from metrics_sampler.api.dependencies import get_sampler
from metrics_sampler.collection.sampler import Sampler

from shared.constants.endpoints import Endpoints

router = APIRouter()


@router.get(Endpoints.HEALTH)
async def healthz(request: Request, sampler: Sampler = Depends(get_sampler)):
    started_at = getattr(request.app.state, "started_at", time.time())
    return {
        "status": "ok",
        "uptime_s": time.time() - started_at,
        "sampling": sampler.running,
    }


@router.get(Endpoints.READY)
async def readyz(sampler: Sampler = Depends(get_sampler)):
    if sampler.sample_count > 0:
        return {"status": "ready", "samples": sampler.sample_count}
    return Response(status_code=503, content="no samples collected yet")
