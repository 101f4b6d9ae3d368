from fastapi import APIRouter

from asset_allocation.api.routes import assets, centres, health

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(centres.router)
api_router.include_router(assets.router)
