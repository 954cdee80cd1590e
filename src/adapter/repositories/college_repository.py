from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.college_repository import ICollegeRepository
from src.domain.entities import College


class CollegeRepository(ICollegeRepository):
    """College repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, college_id: UUID) -> Optional[College]:
        """Get college by ID"""
        stmt = select(College).where(College.id == college_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_code(self, code: str) -> Optional[College]:
        """Get college by its unique code"""
        stmt = select(College).where(College.code == code.upper())
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_active(self) -> List[College]:
        """All active colleges ordered by name"""
        stmt = select(College).where(College.is_active == True).order_by(College.name)  # noqa: E712
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, college: College) -> College:
        """Create a new college"""
        college.code = college.code.upper()
        self.session.add(college)
        await self.session.flush()
        await self.session.refresh(college)
        return college
