"""Repository for the applications table."""

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from admissions.database.models import Application
from admissions.repositories.base_repository import BaseRepository


class ApplicationRepository(BaseRepository[Application]):
    """Data access for admissions applications."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Application)

    async def list_applications(self, status: Optional[str] = None) -> List[Application]:
        """List applications, newest submission first.

        Args:
            status: Optional status to filter on

        Returns:
            Matching applications
        """
        filters = {"status": status} if status else None
        return await self.get_all(filters=filters, order_by="submitted_at")
