from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from vectorfloat.api import health, vector
from vectorfloat.observability.metrics import MetricsMiddleware, metrics_router
from vectorfloat.observability.logging import setup_logging
from vectorfloat.services.numeric import self_check
from contextlib import asynccontextmanager
import logging

logger = logging.getLogger(__name__)

# READY_FLAG is set once startup has verified the vector operations
READY_FLAG = False

# Lifespan handler: READY_FLAG holds the startup self-check result until shutdown
@asynccontextmanager
async def app_lifespan(app: FastAPI):
    global READY_FLAG
    READY_FLAG = self_check()
    if not READY_FLAG:
        logger.error("vector self-check failed, service stays not ready")
    yield
    READY_FLAG = False

def _serialize_error(err):
    # Validation error contexts may carry exception instances, which JSON cannot encode
    if isinstance(err, Exception):
        return str(err)
    if isinstance(err, dict):
        return {k: _serialize_error(v) for k, v in err.items()}
    if isinstance(err, list):
        return [_serialize_error(e) for e in err]
    return err

# Factory function to create the FastAPI app
def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(
        title="VectorFloat Service",
        version="1.0.0",
        lifespan=app_lifespan,
    )
    app.add_middleware(MetricsMiddleware)  # Prometheus request metrics
    app.include_router(metrics_router)     # /metrics
    app.include_router(health.router)      # /health and /ready
    app.include_router(vector.router)      # /vector/summary, /vector/minmax, /vector/scale
    app.state.ready_flag = lambda: READY_FLAG

    # Validation errors always answer 400 Bad Request
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"detail": _serialize_error(exc.errors())},
        )

    return app

# Create the FastAPI app instance
app = create_app()
