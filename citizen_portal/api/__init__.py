from fastapi import APIRouter

from citizen_portal.api.routers import admin, applications, auth, notifications


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(admin.router, prefix="/admin", tags=["admin"])
    router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
    router.include_router(applications.router, prefix="/applications", tags=["applications"])
    return router


__all__ = [
    "create_api_router",
]
