"""
API v1 router that aggregates all endpoint routers.
"""

from fastapi import APIRouter

from fxdeals.api.v1.endpoints import (
    health,
    fx_deals,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(
    fx_deals.router,
    prefix="/fx-deals",
    tags=["fx-deals"],
)
