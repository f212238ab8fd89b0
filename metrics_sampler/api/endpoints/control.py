from fastapi import APIRouter, Request, Response, status

from metrics_sampler.core.logger import get_logger

from shared.constants.endpoints import Endpoints

router = APIRouter()
logger = get_logger("sampler.api.control")


@router.post(Endpoints.SHUTDOWN, status_code=status.HTTP_202_ACCEPTED)
async def shutdown(request: Request):
    """Ask the uvicorn server hosting this app to exit."""
    server = getattr(request.app.state, "server", None)
    if server is None:
        return Response(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content="no server handle attached",
        )
    logger.info("shutdown_requested")
    server.should_exit = True
    return {"status": "stopping"}
