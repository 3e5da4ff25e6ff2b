from datetime import datetime, timedelta, timezone
from functools import partial
from unittest.mock import MagicMock

import pytest

from libs.result import Return
from shortlink.app.repositories.errors import ConstraintViolation
from shortlink.app.services.key_generator import KeyGenerator
from shortlink.app.use_cases.links import (
    CreateLinkCommand,
    CreateLinkUseCase,
    DeleteLinkUseCase,
    GetLinkUseCase,
    ListLinksUseCase,
    ResolveLinkUseCase,
    UpdateLinkCommand,
    UpdateLinkUseCase,
)
from shortlink.domain.entities import ErrorCode
from tests.unit.factories import NOW, make_link


@pytest.fixture
def context():
    ctx = MagicMock()
    ctx.account_id.return_value = Return.ok("alice")
    return ctx


@pytest.fixture
def key_generator_factory(random_source):
    return partial(
        KeyGenerator, random_source=random_source, length=4, alphabet="ab", max_attempts=3
    )


@pytest.fixture
def create_use_case(mock_uow, context, clock, key_generator_factory):
    return CreateLinkUseCase(mock_uow, context, clock, key_generator_factory)


# ----------------------------------------------------------------------
# Create
# ----------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_with_generated_key(create_use_case, mock_uow):
    result = await create_use_case.execute(CreateLinkCommand(uri="https://example.com/a"))

    assert result.is_ok()
    assert result.value.key == "aaaa"
    assert result.value.uri == "https://example.com/a"
    assert result.value.expires_at is None
    assert result.value.created_by_id == "alice"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_with_custom_key_and_ttl(create_use_case):
    result = await create_use_case.execute(
        CreateLinkCommand(uri="http://example.com", key="promo", ttl_minutes=30)
    )

    assert result.is_ok()
    assert result.value.key == "promo"
    assert result.value.expires_at == NOW + timedelta(minutes=30)


@pytest.mark.asyncio
async def test_create_with_zero_ttl_never_expires(create_use_case):
    result = await create_use_case.execute(
        CreateLinkCommand(uri="http://example.com", ttl_minutes=0)
    )

    assert result.value.expires_at is None


@pytest.mark.asyncio
async def test_create_normalizes_aware_expiry_to_utc(create_use_case):
    aware = datetime(2030, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))

    result = await create_use_case.execute(
        CreateLinkCommand(uri="http://example.com", expires_at=aware)
    )

    assert result.value.expires_at == datetime(2030, 1, 1, 12, 0)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "command",
    [
        CreateLinkCommand(uri="ftp://example.com"),
        CreateLinkCommand(uri="not a url"),
        CreateLinkCommand(uri="https://example.com", ttl_minutes=-1),
        CreateLinkCommand(
            uri="https://example.com", ttl_minutes=5, expires_at=datetime(2030, 1, 1)
        ),
    ],
)
async def test_create_invalid_fields(create_use_case, mock_uow, command):
    result = await create_use_case.execute(command)

    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_FIELDS
    mock_uow.links.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_with_taken_custom_key(create_use_case, mock_uow):
    mock_uow.links.exists.return_value = True

    result = await create_use_case.execute(
        CreateLinkCommand(uri="https://example.com", key="promo")
    )

    assert result.is_err()
    assert result.error.code == ErrorCode.KEY_ALREADY_EXISTS


@pytest.mark.asyncio
async def test_custom_key_losing_insert_race_is_not_retried(create_use_case, mock_uow):
    mock_uow.links.create.side_effect = ConstraintViolation("duplicate")

    result = await create_use_case.execute(
        CreateLinkCommand(uri="https://example.com", key="promo")
    )

    assert result.is_err()
    assert result.error.code == ErrorCode.KEY_ALREADY_EXISTS
    assert mock_uow.links.create.await_count == 1


@pytest.mark.asyncio
async def test_generated_key_losing_insert_race_is_regenerated(
    create_use_case, mock_uow, random_source
):
    random_source.queue(*[b"\x00"] * 4, *[b"\x01"] * 4)
    mock_uow.links.create.side_effect = _fail_then_return([ConstraintViolation("duplicate")])

    result = await create_use_case.execute(CreateLinkCommand(uri="https://example.com"))

    assert result.is_ok()
    assert result.value.key == "bbbb"
    assert mock_uow.links.create.await_count == 2


@pytest.mark.asyncio
async def test_generated_key_insert_races_are_bounded(create_use_case, mock_uow):
    mock_uow.links.create.side_effect = ConstraintViolation("duplicate")

    result = await create_use_case.execute(CreateLinkCommand(uri="https://example.com"))

    assert result.is_err()
    assert result.error.code == ErrorCode.KEY_GENERATION_EXHAUSTED
    assert mock_uow.links.create.await_count == 3
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_key_exhaustion_is_surfaced(create_use_case, mock_uow):
    mock_uow.links.exists.return_value = True

    result = await create_use_case.execute(CreateLinkCommand(uri="https://example.com"))

    assert result.is_err()
    assert result.error.code == ErrorCode.KEY_GENERATION_EXHAUSTED
    mock_uow.links.create.assert_not_awaited()


def _fail_then_return(failures):
    failures = list(failures)

    def create(link):
        if failures:
            raise failures.pop(0)
        return link

    return create


# ----------------------------------------------------------------------
# Read / update / delete
# ----------------------------------------------------------------------


@pytest.mark.asyncio
async def test_get_link(mock_uow, context):
    mock_uow.links.get_by_key.return_value = make_link("promo")

    result = await GetLinkUseCase(mock_uow, context).execute("promo")

    assert result.is_ok()
    assert result.value.key == "promo"


@pytest.mark.asyncio
async def test_get_unknown_link(mock_uow, context):
    result = await GetLinkUseCase(mock_uow, context).execute("missing")

    assert result.is_err()
    assert result.error.code == ErrorCode.LINK_NOT_FOUND


@pytest.mark.asyncio
async def test_list_links(mock_uow, context):
    mock_uow.links.list_all.return_value = [make_link("a"), make_link("b")]

    result = await ListLinksUseCase(mock_uow, context).execute()

    assert [link.key for link in result.value.data] == ["a", "b"]
    assert result.value.pagination.total == 2


@pytest.mark.asyncio
async def test_update_link_uri_and_clear_expiry(mock_uow, context, clock):
    link = make_link("promo", expires_at=NOW + timedelta(days=1))
    mock_uow.links.get_by_key.return_value = link
    clock.advance(hours=1)

    result = await UpdateLinkUseCase(mock_uow, context, clock).execute(
        "promo", UpdateLinkCommand(uri="https://example.org", ttl_minutes=0)
    )

    assert result.is_ok()
    assert result.value.uri == "https://example.org"
    assert result.value.expires_at is None
    assert result.value.updated_at == NOW + timedelta(hours=1)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_without_expiry_fields_keeps_expiry(mock_uow, context, clock):
    expiry = NOW + timedelta(days=1)
    mock_uow.links.get_by_key.return_value = make_link("promo", expires_at=expiry)

    result = await UpdateLinkUseCase(mock_uow, context, clock).execute(
        "promo", UpdateLinkCommand(uri="https://example.org")
    )

    assert result.value.expires_at == expiry


@pytest.mark.asyncio
async def test_delete_link(mock_uow, context):
    link = make_link("promo")
    mock_uow.links.get_by_key.return_value = link

    result = await DeleteLinkUseCase(mock_uow, context).execute("promo")

    assert result.is_ok()
    mock_uow.links.delete.assert_awaited_once_with(link)


# ----------------------------------------------------------------------
# Resolve
# ----------------------------------------------------------------------


@pytest.mark.asyncio
async def test_resolve_live_link(mock_uow, clock):
    mock_uow.links.get_by_key.return_value = make_link("promo", uri="https://example.com/x")

    result = await ResolveLinkUseCase(mock_uow, clock).execute("promo")

    assert result.is_ok()
    assert result.value == "https://example.com/x"


@pytest.mark.asyncio
async def test_resolve_expired_link(mock_uow, clock):
    mock_uow.links.get_by_key.return_value = make_link("promo", expires_at=NOW)

    result = await ResolveLinkUseCase(mock_uow, clock).execute("promo")

    assert result.is_err()
    assert result.error.code == ErrorCode.LINK_EXPIRED


@pytest.mark.asyncio
async def test_resolve_unknown_link(mock_uow, clock):
    result = await ResolveLinkUseCase(mock_uow, clock).execute("missing")

    assert result.is_err()
    assert result.error.code == ErrorCode.LINK_NOT_FOUND
