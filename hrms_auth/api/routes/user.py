from uuid import UUID

from fastapi import APIRouter, Depends, status

from hrms_auth.api.error import ClientError, ServerError
from hrms_auth.app.services.field_cipher import FieldCipher
from hrms_auth.app.services.unit_of_work import UnitOfWork
from hrms_auth.app.use_cases.users import LoadProfileUseCase, ProfileResponse
from hrms_auth.depends import (
    CurrentSubject,
    get_current_subject,
    get_field_cipher,
    get_unit_of_work,
)

router = APIRouter(tags=["User"])


@router.get("/me", status_code=status.HTTP_200_OK, response_model=ProfileResponse)
async def get_me(
    current_subject: CurrentSubject = Depends(get_current_subject),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cipher: FieldCipher = Depends(get_field_cipher),
):
    """
    Load Current Subject

    Returns the employee or customer behind the access token.

    Raises:
        - 401 Unauthorized: Invalid or expired access token
        - 404 Not Found: SUBJECT_NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    use_case = LoadProfileUseCase(uow, cipher)
    result = await use_case.execute(
        UUID(current_subject.subject_id),
        current_subject.subject_type,
        current_subject.role,
    )

    if result.is_err():
        error = result.error
        if error.code == "SUBJECT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
