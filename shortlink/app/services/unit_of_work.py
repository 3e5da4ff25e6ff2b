from abc import ABC, abstractmethod

from shortlink.app.repositories.account_repository import IAccountRepository
from shortlink.app.repositories.link_repository import ILinkRepository
from shortlink.app.repositories.token_repository import ITokenRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    accounts: IAccountRepository
    tokens: ITokenRepository
    links: ILinkRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
