from fastapi import APIRouter

from inventory.api.endpoints import health
from inventory.api.endpoints import items

api_router = APIRouter()
api_router.include_router(items.router, tags=["inventory"])
api_router.include_router(health.router, prefix="/health", tags=["health"])
