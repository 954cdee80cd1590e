from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.principal import Principal
from .dtos import CollegeListItem, CollegeListResponse


class ListCollegesUseCase:
    """
    Use case for the public college listing.

    Business Rules:
    - Only active colleges are listed
    - Anonymous callers get the plain list
    - Authenticated college members see their own college flagged
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, principal: Principal) -> Result[CollegeListResponse]:
        async with self.uow:
            colleges = await self.uow.colleges.list_active()

            items = [
                CollegeListItem(
                    id=str(college.id),
                    name=college.name,
                    code=college.code,
                    is_active=college.is_active,
                    is_member=(
                        not principal.is_anonymous and principal.college_id == college.id
                    ),
                )
                for college in colleges
            ]

        return Return.ok(CollegeListResponse(colleges=items))
