from fastapi import APIRouter

from storefront.api import admin_api, checkout_api, health_api, orders_api

api_router = APIRouter()
api_router.include_router(health_api.router)
api_router.include_router(orders_api.router)
api_router.include_router(admin_api.router)
api_router.include_router(checkout_api.router)
