"""Repository for the application_files table."""

from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from admissions.database.models import ApplicationFile
from admissions.repositories.base_repository import BaseRepository


class ApplicationFileRepository(BaseRepository[ApplicationFile]):
    """Data access for supporting documents attached to applications."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, ApplicationFile)

    async def list_by_application(self, application_id: UUID) -> List[ApplicationFile]:
        """All files for an application, newest first."""
        return await self.get_all(
            filters={"application_id": application_id},
            order_by="created_at",
        )
