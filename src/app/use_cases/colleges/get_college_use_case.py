from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import CollegeInfo


class GetCollegeUseCase:
    """Load one college; tenant scoping is enforced by the caller's role gate"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, college_id: UUID) -> Result[CollegeInfo]:
        async with self.uow:
            college = await self.uow.colleges.get_by_id(college_id)
            if college is None:
                return Return.err(Error("COLLEGE_NOT_FOUND", "College not found"))
            return Return.ok(CollegeInfo.from_college(college))
