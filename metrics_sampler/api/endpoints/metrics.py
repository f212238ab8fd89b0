from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from metrics_sampler.api.dependencies import get_sampler
from metrics_sampler.collection.sampler import Sampler
from metrics_sampler.core.logger import get_logger

from shared.constants.endpoints import Endpoints

router = APIRouter()
logger = get_logger("sampler.api.metrics")

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


@router.get(Endpoints.SNAPSHOT)
async def snapshot(sampler: Sampler = Depends(get_sampler)):
    """Everything collected so far, oldest sample first."""
    try:
        body = sampler.get().to_json_dict()
    except Exception as e:
        logger.exception("snapshot_failed", extra={"error": str(e)})
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
            headers=CORS_HEADERS,
        )
    return JSONResponse(content=body, headers=CORS_HEADERS)
