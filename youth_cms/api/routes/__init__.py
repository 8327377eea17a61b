"""API routes, mounted under settings.API_PREFIX."""

from fastapi import APIRouter

from youth_cms.api.routes import admin, auth, health, public, superadmin, uploads

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(public.router, prefix="/public", tags=["public"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(uploads.router, prefix="/admin/uploads", tags=["admin"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(superadmin.router, prefix="/superadmin", tags=["superadmin"])
