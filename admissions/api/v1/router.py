from fastapi import APIRouter

from admissions.api.v1.endpoints import admin, application_files, applications, storage

# Create API router
api_router = APIRouter()

api_router.include_router(applications.router, prefix="/applications", tags=["Applications"])
api_router.include_router(application_files.router, prefix="/application-files", tags=["Application Files"])
api_router.include_router(storage.router, prefix="/storage", tags=["Storage"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])

__all__ = ["api_router"]
