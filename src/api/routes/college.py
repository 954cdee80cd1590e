from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.colleges import (
    CollegeInfo,
    CollegeListResponse,
    CreateCollegeCommand,
    CreateCollegeUseCase,
    GetCollegeUseCase,
    ListCollegesUseCase,
)
from src.depends import (
    authenticate_optional,
    get_unit_of_work,
    require_college_access,
    require_roles,
)
from src.domain.entities import UserRole
from src.domain.principal import AuthContext

router = APIRouter(prefix="/colleges", tags=["College"])


class CreateCollegeRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="College name")
    code: str = Field(..., min_length=1, max_length=32, description="Short unique code")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CollegeInfo)
async def create_college(
    request: CreateCollegeRequest,
    context: AuthContext = Depends(require_roles(UserRole.super_admin)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create College (super_admin)

    Raises:
        - 409 Conflict: Code already in use
    """
    use_case = CreateCollegeUseCase(uow)
    result = await use_case.execute(CreateCollegeCommand(name=request.name, code=request.code))

    if result.is_err():
        error = result.error
        if error.code == "COLLEGE_CODE_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=CollegeListResponse)
async def list_colleges(
    context: AuthContext = Depends(authenticate_optional),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Active Colleges

    Public. When the caller is authenticated their own college is flagged.
    """
    use_case = ListCollegesUseCase(uow)
    result = await use_case.execute(context.principal)
    return result.value


@router.get("/{college_id}", status_code=status.HTTP_200_OK, response_model=CollegeInfo)
async def get_college(
    college_id: UUID,
    context: AuthContext = Depends(require_college_access),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get College

    super_admin sees every college, everyone else only their own.

    Raises:
        - 403 Forbidden: College belongs to another tenant
        - 404 Not Found: College not found
    """
    use_case = GetCollegeUseCase(uow)
    result = await use_case.execute(college_id)

    if result.is_err():
        error = result.error
        if error.code == "COLLEGE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
