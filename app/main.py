import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.core.errors import LifecycleError
from app.api.v1.router import api_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Clinic Data Lifecycle Service",
)


@app.exception_handler(LifecycleError)
async def lifecycle_error_handler(request: Request, exc: LifecycleError) -> JSONResponse:
    """
    Render purge/seed failures as {error, details, code}.
    """
    logger.warning(
        "%s %s failed code=%s step=%s retryable=%s",
        request.method,
        request.url.path,
        exc.code.value,
        exc.step,
        exc.retryable,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.get("/health", tags=["health"])
async def root_health() -> dict:
    """
    Global health check endpoint.
    """
    return {"status": "ok"}


# Mount versioned API router
app.include_router(api_router, prefix=settings.api_v1_prefix)
