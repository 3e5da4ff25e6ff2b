from datetime import timedelta

import pytest

from shortlink.app.services.security_context import SecurityContext
from shortlink.app.services.token_lifecycle import TokenLifecycleManager
from shortlink.app.use_cases.auth import LoginUseCase, LogoutUseCase, MarkTokenUsedUseCase
from shortlink.domain.entities import REVOKED_AT, ErrorCode
from tests.unit.factories import NOW, make_account, make_token


@pytest.fixture
def tokens(mock_uow, clock, random_source):
    return TokenLifecycleManager(mock_uow, clock, random_source)


@pytest.fixture
def context(mock_uow, tokens, hasher):
    return SecurityContext(mock_uow, tokens, hasher)


@pytest.fixture
def alice(mock_uow, hasher):
    account = make_account("alice", hasher.hash("correct-horse"))
    mock_uow.accounts.get_by_id.side_effect = (
        lambda account_id: account if account_id == "alice" else None
    )
    return account


@pytest.mark.asyncio
async def test_successful_login(mock_uow, context, hasher, alice):
    use_case = LoginUseCase(mock_uow, context, hasher)

    result = await use_case.execute("alice", "correct-horse")

    assert result.is_ok()
    data = result.value
    assert data.account.id == "alice"
    assert data.token.account_id == "alice"
    assert data.token.expires_at == NOW + timedelta(minutes=60)
    assert not hasattr(data.account, "password_hash")
    mock_uow.tokens.create.assert_awaited_once()
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("account_id, password", [("alice", "wrong-horse"), ("nobody", "x")])
async def test_login_failures_look_the_same(mock_uow, context, hasher, alice, account_id, password):
    use_case = LoginUseCase(mock_uow, context, hasher)

    result = await use_case.execute(account_id, password)

    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_CREDENTIALS
    assert result.error.message == "Invalid account ID or password."
    mock_uow.tokens.create.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_login_disabled_account(mock_uow, context, hasher, alice):
    alice.disabled = True
    use_case = LoginUseCase(mock_uow, context, hasher)

    result = await use_case.execute("alice", "correct-horse")

    assert result.is_err()
    assert result.error.code == ErrorCode.ACCOUNT_DISABLED


@pytest.mark.asyncio
async def test_logout_revokes_active_tokens(mock_uow, context, alice):
    t1 = make_token("t1", "alice", expires_at=NOW + timedelta(minutes=30))
    t2 = make_token("t2", "alice", expires_at=NOW + timedelta(minutes=10))
    mock_uow.tokens.get_by_id.return_value = t1
    mock_uow.tokens.get_by_account_id.return_value = [t1, t2]
    await context.authenticate_token_id("t1")

    result = await LogoutUseCase(mock_uow, context).execute()

    assert result.is_ok()
    assert result.value.revoked_count == 2
    assert t1.is_revoked() and t2.is_revoked()
    assert not context.is_authenticated
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_logout_requires_authentication(mock_uow, context):
    result = await LogoutUseCase(mock_uow, context).execute()

    assert result.is_err()
    assert result.error.code == ErrorCode.NOT_AUTHENTICATED


@pytest.mark.asyncio
async def test_mark_token_used(mock_uow, tokens, clock):
    token = make_token("t1", "alice", expires_at=NOW + timedelta(minutes=30))
    mock_uow.tokens.get_by_id.return_value = token
    clock.advance(minutes=3)

    result = await MarkTokenUsedUseCase(mock_uow, tokens).execute("t1")

    assert result.is_ok()
    assert token.last_used_at == NOW + timedelta(minutes=3)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_mark_used_leaves_revoked_token_alone(mock_uow, tokens):
    token = make_token("t1", "alice", expires_at=REVOKED_AT, last_used_at=NOW)
    mock_uow.tokens.get_by_id.return_value = token

    result = await MarkTokenUsedUseCase(mock_uow, tokens).execute("t1")

    assert result.is_ok()
    mock_uow.tokens.update.assert_not_awaited()
