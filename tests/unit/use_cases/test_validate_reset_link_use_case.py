from datetime import timedelta

import pytest

from hrms_auth.app.use_cases.auth.validate_reset_link_use_case import ValidateResetLinkUseCase
from hrms_auth.domain.base import utcnow
from hrms_auth.domain.entities import PasswordResetRequest

TTL = timedelta(minutes=15)


@pytest.mark.asyncio
async def test_validate_fresh_token(mock_uow):
    # Arrange
    mock_uow.password_resets.get_by_token.return_value = PasswordResetRequest(
        email="official@co.com", token="aa:bb", created_at=utcnow() - timedelta(minutes=5)
    )
    use_case = ValidateResetLinkUseCase(mock_uow, TTL)

    # Act
    result = await use_case.execute("aa:bb")

    # Assert
    assert result.is_ok()
    assert result.value.valid is True
    assert result.value.email == "official@co.com"
    mock_uow.password_resets.get_by_token.assert_called_once_with("aa:bb")
    mock_uow.password_resets.delete_by_email.assert_not_called()


@pytest.mark.asyncio
async def test_validate_expired_token_looks_like_missing(mock_uow):
    """A 16-minute-old row still exists but is rejected like an unknown token"""
    mock_uow.password_resets.get_by_token.return_value = PasswordResetRequest(
        email="official@co.com", token="aa:bb", created_at=utcnow() - timedelta(minutes=16)
    )
    use_case = ValidateResetLinkUseCase(mock_uow, TTL)

    expired = await use_case.execute("aa:bb")
    mock_uow.password_resets.get_by_token.return_value = None
    missing = await use_case.execute("aa:bb")

    assert expired.is_err() and missing.is_err()
    assert expired.error == missing.error
    assert expired.error.code == "RESET_TOKEN_INVALID"


@pytest.mark.asyncio
async def test_validate_empty_token(mock_uow):
    use_case = ValidateResetLinkUseCase(mock_uow, TTL)

    result = await use_case.execute("")

    assert result.is_err()
    mock_uow.password_resets.get_by_token.assert_not_called()
