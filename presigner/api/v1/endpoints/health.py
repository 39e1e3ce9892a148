from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest

from presigner.core.config import Settings, get_settings

router = APIRouter(tags=["health"])
REQUEST_COUNTER = Counter("presigner_api_requests_total", "Total API requests", ["path"])


@router.get("/health/live")
async def health_live():
    REQUEST_COUNTER.labels(path="/health/live").inc()
    return {"status": "ok"}


@router.get("/health/ready")
async def health_ready(settings: Settings = Depends(get_settings)):
    REQUEST_COUNTER.labels(path="/health/ready").inc()
    missing = settings.missing_credentials
    if missing:
        return JSONResponse(status_code=503, content={"status": "unconfigured", "missing": missing})
    return {"status": "ready", "auth": settings.auth_enabled}


@router.get("/metrics", response_class=PlainTextResponse)
async def metrics():
    return PlainTextResponse(generate_latest().decode("utf-8"), media_type=CONTENT_TYPE_LATEST)
