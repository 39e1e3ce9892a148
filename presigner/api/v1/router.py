from fastapi import APIRouter

from presigner.api.v1.endpoints import health, presign

api_router = APIRouter()
api_router.include_router(presign.router)
api_router.include_router(health.router)
