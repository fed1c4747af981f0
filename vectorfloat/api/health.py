from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

router = APIRouter()

@router.get("/health")
async def health() -> dict[str, str]:
    """
    Liveness probe.
    Returns 200 OK while the process is alive; the service keeps no state worth checking.
    """
    return {"status": "ok"}

@router.get("/ready")
async def ready(request: Request):
    """
    Readiness probe.
    Returns 200 OK once the startup self-check of the vector operations has passed, 503 otherwise.
    """
    ready_flag = getattr(request.app.state, "ready_flag", None)
    if ready_flag and ready_flag():
        return {"status": "ready"}
    return JSONResponse({"status": "not ready"}, status_code=HTTP_503_SERVICE_UNAVAILABLE)
