"""Centralized dependency injection for the FastAPI application.

Repositories get the request-scoped session; services get their
repositories and the storage client through these factories, so tests can
swap any layer with ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.database import get_async_session
from admissions.repositories.application_file_repository import ApplicationFileRepository
from admissions.repositories.application_repository import ApplicationRepository
from admissions.services.application_file_service import ApplicationFileService
from admissions.services.application_service import ApplicationService
from admissions.services.storage_service import StorageService
from admissions.services.upload_service import UploadService
from admissions.services.url_service import UrlService


async def get_application_repository(
    db_session: Annotated[AsyncSession, Depends(get_async_session)]
) -> ApplicationRepository:
    return ApplicationRepository(db_session)


async def get_application_file_repository(
    db_session: Annotated[AsyncSession, Depends(get_async_session)]
) -> ApplicationFileRepository:
    return ApplicationFileRepository(db_session)


async def get_application_service(
    repository: Annotated[ApplicationRepository, Depends(get_application_repository)]
) -> ApplicationService:
    """Get application service instance.

    Args:
        repository: Application repository for the request

    Returns:
        ApplicationService: Service for submission and review
    """
    return ApplicationService(repository)


async def get_application_file_service(
    repository: Annotated[ApplicationFileRepository, Depends(get_application_file_repository)]
) -> ApplicationFileService:
    return ApplicationFileService(repository)


def get_storage_service() -> StorageService:
    return StorageService()


def get_url_service(
    storage: Annotated[StorageService, Depends(get_storage_service)]
) -> UrlService:
    return UrlService(storage)


def get_upload_service(
    storage: Annotated[StorageService, Depends(get_storage_service)],
    url_service: Annotated[UrlService, Depends(get_url_service)],
) -> UploadService:
    return UploadService(storage, url_service)
