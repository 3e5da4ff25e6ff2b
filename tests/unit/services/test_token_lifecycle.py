from datetime import timedelta

import pytest

from shortlink.app.services.token_lifecycle import TokenLifecycleManager
from shortlink.domain.entities import REVOKED_AT, ErrorCode
from tests.unit.factories import NOW, make_token


@pytest.fixture
def tokens(mock_uow, clock, random_source):
    return TokenLifecycleManager(
        mock_uow, clock, random_source, ttl=timedelta(minutes=60)
    )


@pytest.mark.asyncio
async def test_issue_uses_16_random_bytes_hex_encoded(tokens, mock_uow, random_source):
    random_source.queue(bytes(range(16)))

    token = await tokens.issue("alice")

    assert token.id == bytes(range(16)).hex()
    assert len(token.id) == 32
    assert token.account_id == "alice"
    assert token.expires_at == NOW + timedelta(minutes=60)
    assert token.last_used_at is None
    assert token.created_by_id == "alice"
    mock_uow.tokens.create.assert_awaited_once_with(token)


@pytest.mark.asyncio
async def test_issue_records_explicit_creator(tokens):
    token = await tokens.issue("alice", created_by_id="root")

    assert token.created_by_id == "root"


@pytest.mark.asyncio
async def test_get_unknown_token(tokens):
    result = await tokens.get("missing")

    assert result.is_err()
    assert result.error.code == ErrorCode.TOKEN_NOT_FOUND


@pytest.mark.asyncio
async def test_expiry_boundary_is_inclusive(tokens, clock):
    token = make_token("t1", "alice", expires_at=NOW + timedelta(minutes=1))

    assert not tokens.is_expired(token)
    clock.advance(minutes=1)
    assert tokens.is_expired(token)


@pytest.mark.asyncio
async def test_revoke_marks_used_and_force_expires(tokens, mock_uow, clock):
    token = make_token("t1", "alice", expires_at=NOW + timedelta(minutes=30))
    clock.advance(minutes=5)

    revoked = await tokens.revoke(token)

    assert revoked.expires_at == REVOKED_AT
    assert revoked.last_used_at == NOW + timedelta(minutes=5)
    assert revoked.is_revoked()
    assert tokens.is_expired(revoked)
    mock_uow.tokens.update.assert_awaited_once_with(token)


@pytest.mark.asyncio
async def test_revoke_twice_keeps_revoked_state(tokens):
    token = make_token("t1", "alice", expires_at=NOW + timedelta(minutes=30))

    await tokens.revoke(token)
    again = await tokens.revoke(token)

    assert again.expires_at == REVOKED_AT
    assert tokens.is_expired(again)


@pytest.mark.asyncio
async def test_mark_used_stamps_now(tokens, clock):
    token = make_token("t1", "alice", expires_at=NOW + timedelta(minutes=30))
    clock.advance(minutes=2)

    used = await tokens.mark_used(token)

    assert used.last_used_at == NOW + timedelta(minutes=2)
    assert used.expires_at == NOW + timedelta(minutes=30)


@pytest.mark.asyncio
async def test_active_tokens_filters_expired_and_revoked(tokens, mock_uow):
    live = make_token("live", "alice", expires_at=NOW + timedelta(minutes=30))
    stale = make_token("stale", "alice", expires_at=NOW - timedelta(minutes=1))
    revoked = make_token("revoked", "alice", expires_at=REVOKED_AT)
    mock_uow.tokens.get_by_account_id.return_value = [live, stale, revoked]

    active = await tokens.active_tokens("alice")

    assert active == [live]
    mock_uow.tokens.get_by_account_id.assert_awaited_once_with("alice")
