from unittest.mock import AsyncMock, MagicMock

import pytest

from shortlink.app.services.password_hasher import PasswordHasher
from tests.unit.factories import FakeClock, FakeRandomSource


def _returns_first_arg(entity, *args, **kwargs):
    return entity


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.accounts = MagicMock()
    uow.accounts.get_by_id = AsyncMock(return_value=None)
    uow.accounts.list_all = AsyncMock(return_value=[])
    uow.accounts.create = AsyncMock(side_effect=_returns_first_arg)
    uow.accounts.update = AsyncMock(side_effect=_returns_first_arg)
    uow.accounts.delete = AsyncMock()

    uow.tokens = MagicMock()
    uow.tokens.get_by_id = AsyncMock(return_value=None)
    uow.tokens.get_by_account_id = AsyncMock(return_value=[])
    uow.tokens.create = AsyncMock(side_effect=_returns_first_arg)
    uow.tokens.update = AsyncMock(side_effect=_returns_first_arg)

    uow.links = MagicMock()
    uow.links.get_by_key = AsyncMock(return_value=None)
    uow.links.exists = AsyncMock(return_value=False)
    uow.links.list_all = AsyncMock(return_value=[])
    uow.links.create = AsyncMock(side_effect=_returns_first_arg)
    uow.links.update = AsyncMock(side_effect=_returns_first_arg)
    uow.links.delete = AsyncMock()
    return uow


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def random_source():
    return FakeRandomSource()


@pytest.fixture
def hasher():
    # Lowest cost bcrypt accepts
    return PasswordHasher(rounds=4)
