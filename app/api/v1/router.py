from fastapi import APIRouter

from app.api.v1.endpoints import admin, ai, auth

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(ai.router, prefix="/ai", tags=["AI"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
