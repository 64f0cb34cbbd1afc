"""
HTTP routers, mounted under ``/api/v1``.
"""

from fastapi import APIRouter

from restaurant_api.api import menu, restaurant

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(restaurant.router)
api_router.include_router(menu.router)

__all__ = ["api_router"]
