"""
Admin API Routes - Housekeeping Endpoints

Called by schedulers, not by end users. Authentication is via Admin API Key.
"""

from datetime import timedelta

from fastapi import APIRouter, Depends, status

from hrms_auth.api.error import ServerError
from hrms_auth.api.utils.admin_auth import verify_admin_api_key
from hrms_auth.app.services.unit_of_work import UnitOfWork
from hrms_auth.app.use_cases.sessions import CleanupSessionsResponse, CleanupSessionsUseCase
from hrms_auth.depends import get_settings, get_unit_of_work
from hrms_auth.settings import AuthSettings

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/sessions/cleanup",
    status_code=status.HTTP_200_OK,
    response_model=CleanupSessionsResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def cleanup_sessions(
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_settings),
):
    """
    Session Cleanup

    Marks employees with only lapsed sessions OFFLINE and deletes revoked
    sessions past the retention window.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 500 Internal Server Error: Server error
    """
    use_case = CleanupSessionsUseCase(
        uow, timedelta(days=settings.revoked_session_retention_days)
    )
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value
