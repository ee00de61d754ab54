from admissions.services.application_file_service import ApplicationFileService
from admissions.services.application_service import ApplicationService
from admissions.services.storage_service import StorageService
from admissions.services.upload_service import UploadService
from admissions.services.url_service import UrlService

__all__ = [
    "ApplicationFileService",
    "ApplicationService",
    "StorageService",
    "UploadService",
    "UrlService",
]
