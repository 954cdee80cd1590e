from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import College
from .dtos import CollegeInfo, CreateCollegeCommand


class CreateCollegeUseCase:
    """
    Use case for creating a college (tenant).

    Business Rules:
    - Code is unique, compared upper-cased
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: CreateCollegeCommand) -> Result[CollegeInfo]:
        code = command.code.strip().upper()
        async with self.uow:
            if await self.uow.colleges.get_by_code(code):
                return Return.err(
                    Error("COLLEGE_CODE_EXISTS", "A college with this code already exists")
                )

            college = await self.uow.colleges.create(College(name=command.name, code=code))
            await self.uow.commit()

            return Return.ok(CollegeInfo.from_college(college))
