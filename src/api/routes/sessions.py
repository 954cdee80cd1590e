from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from libs.result import Error
from src.api.error import ServerError
from src.app.repositories.session_repository import SessionStoreError
from src.app.services.session_maintenance import SessionMaintenanceService
from src.app.services.unit_of_work import UnitOfWork
from src.depends import get_unit_of_work, require_permission
from src.domain.principal import AuthContext

router = APIRouter(prefix="/sessions", tags=["Sessions"])


class SessionStatsResponse(BaseModel):
    """Session row counts by state"""

    total: int
    active: int
    revoked: int
    expired: int


@router.get("/stats", status_code=status.HTTP_200_OK, response_model=SessionStatsResponse)
async def session_stats(
    context: AuthContext = Depends(require_permission("sessions", "read")),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Session Statistics (super_admin)

    Counts used to decide when to run the cleanup script.
    """
    try:
        stats = await SessionMaintenanceService(uow).get_session_stats()
    except SessionStoreError:
        raise ServerError(Error("SESSION_STATS_FAILED", "Failed to read session statistics"))
    return SessionStatsResponse(**stats)
