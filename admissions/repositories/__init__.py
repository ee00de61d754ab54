from admissions.repositories.application_file_repository import ApplicationFileRepository
from admissions.repositories.application_repository import ApplicationRepository
from admissions.repositories.base_repository import BaseRepository

__all__ = [
    "ApplicationFileRepository",
    "ApplicationRepository",
    "BaseRepository",
]
