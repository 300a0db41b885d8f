import asyncio
from datetime import timedelta
from typing import Dict, Optional
from uuid import uuid4

import pytest

from hrms_auth.app.use_cases.auth.extend_session_use_case import ExtendSessionUseCase
from hrms_auth.domain.base import utcnow
from hrms_auth.domain.entities import Session, SubjectType, User


def make_session(token_issuer, secret, **overrides):
    fields = dict(
        subject_id=uuid4(),
        subject_type=SubjectType.employee,
        token_hash=token_issuer.hash(secret),
        expires_at=utcnow() + timedelta(days=1),
    )
    fields.update(overrides)
    return Session(**fields)


class InMemorySessions:
    """Session store double whose rotate is an atomic compare-and-swap"""

    def __init__(self):
        self.rows: Dict[str, Session] = {}

    async def find_by_token_hash(self, token_hash: str) -> Optional[Session]:
        await asyncio.sleep(0)  # yield so concurrent callers interleave
        row = self.rows.get(token_hash)
        return row

    async def rotate(self, old_hash, new_hash, new_expires_at) -> int:
        row = self.rows.get(old_hash)
        if row is None or row.revoked_at is not None:
            return 0
        del self.rows[old_hash]
        row.token_hash = new_hash
        row.expires_at = new_expires_at
        self.rows[new_hash] = row
        return 1


@pytest.mark.asyncio
async def test_extend_rotates_secret(mock_uow, token_issuer, session_ttl):
    """Valid refresh secret yields new access token and new secret"""
    # Arrange
    session = make_session(token_issuer, "R1")
    mock_uow.sessions.find_by_token_hash.return_value = session
    mock_uow.users.get_by_employee_id.return_value = User(
        employee_id=session.subject_id, password_hash="$2b$x", role="hr"
    )
    use_case = ExtendSessionUseCase(mock_uow, token_issuer, session_ttl)

    # Act
    result = await use_case.execute("R1")

    # Assert
    assert result.is_ok()
    issued = result.value
    assert issued.refresh_token != "R1"
    assert issued.response.subject.role == "hr"

    old_hash, new_hash, new_expiry = mock_uow.sessions.rotate.call_args.args
    assert old_hash == token_issuer.hash("R1")
    assert new_hash == token_issuer.hash(issued.refresh_token)
    assert new_expiry > session.expires_at
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_extend_customer_session_role(mock_uow, token_issuer, session_ttl):
    session = make_session(token_issuer, "R1", subject_type=SubjectType.customer)
    mock_uow.sessions.find_by_token_hash.return_value = session
    use_case = ExtendSessionUseCase(mock_uow, token_issuer, session_ttl)

    result = await use_case.execute("R1")

    assert result.is_ok()
    assert result.value.response.subject.role == "customer"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"revoked_at": utcnow() - timedelta(minutes=1)},
        {"expires_at": utcnow() - timedelta(seconds=1)},
    ],
    ids=["revoked", "expired"],
)
async def test_extend_rejects_invalid_session(mock_uow, token_issuer, session_ttl, overrides):
    mock_uow.sessions.find_by_token_hash.return_value = make_session(
        token_issuer, "R1", **overrides
    )
    use_case = ExtendSessionUseCase(mock_uow, token_issuer, session_ttl)

    result = await use_case.execute("R1")

    assert result.is_err()
    assert result.error.code == "SESSION_NOT_FOUND"
    mock_uow.sessions.rotate.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("secret", [None, "", "unknown-secret"])
async def test_extend_unknown_or_missing_secret(mock_uow, token_issuer, session_ttl, secret):
    use_case = ExtendSessionUseCase(mock_uow, token_issuer, session_ttl)

    result = await use_case.execute(secret)

    assert result.is_err()
    assert result.error.code == "SESSION_NOT_FOUND"


@pytest.mark.asyncio
async def test_extend_lost_compare_and_swap(mock_uow, token_issuer, session_ttl):
    """rowsAffected == 0 is treated exactly like a missing session"""
    # Arrange
    mock_uow.sessions.find_by_token_hash.return_value = make_session(token_issuer, "R1")
    mock_uow.sessions.rotate.return_value = 0
    use_case = ExtendSessionUseCase(mock_uow, token_issuer, session_ttl)

    # Act
    result = await use_case.execute("R1")

    # Assert
    assert result.is_err()
    assert result.error.code == "SESSION_NOT_FOUND"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_concurrent_extends_succeed_exactly_once(mock_uow, token_issuer, session_ttl):
    """Two extends racing on the same secret: one wins, the other must re-authenticate"""
    # Arrange
    store = InMemorySessions()
    session = make_session(token_issuer, "R1", subject_type=SubjectType.customer)
    store.rows[session.token_hash] = session
    mock_uow.sessions = store
    use_case = ExtendSessionUseCase(mock_uow, token_issuer, session_ttl)

    # Act
    first, second = await asyncio.gather(use_case.execute("R1"), use_case.execute("R1"))

    # Assert
    outcomes = sorted([first.is_ok(), second.is_ok()])
    assert outcomes == [False, True]
    loser = first if first.is_err() else second
    assert loser.error.code == "SESSION_NOT_FOUND"
    assert len(store.rows) == 1


@pytest.mark.asyncio
async def test_rotated_secret_cannot_be_replayed(mock_uow, token_issuer, session_ttl):
    """R1 -> R2 succeeds; R1 again fails; R2 succeeds"""
    store = InMemorySessions()
    session = make_session(token_issuer, "R1", subject_type=SubjectType.customer)
    store.rows[session.token_hash] = session
    mock_uow.sessions = store
    use_case = ExtendSessionUseCase(mock_uow, token_issuer, session_ttl)

    first = await use_case.execute("R1")
    replay = await use_case.execute("R1")
    follow_up = await use_case.execute(first.value.refresh_token)

    assert first.is_ok()
    assert replay.is_err()
    assert replay.error.code == "SESSION_NOT_FOUND"
    assert follow_up.is_ok()
