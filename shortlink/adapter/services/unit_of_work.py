from sqlmodel.ext.asyncio.session import AsyncSession

from shortlink.adapter.repositories.account_repository import AccountRepository
from shortlink.adapter.repositories.link_repository import LinkRepository
from shortlink.adapter.repositories.token_repository import TokenRepository
from shortlink.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.accounts = AccountRepository(self.session)
        self.tokens = TokenRepository(self.session)
        self.links = LinkRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
