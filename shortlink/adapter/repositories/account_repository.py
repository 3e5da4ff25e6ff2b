import logging
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import FlushError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from shortlink.app.repositories.account_repository import IAccountRepository
from shortlink.app.repositories.errors import ConstraintViolation
from shortlink.domain.base import EntityLoadError
from shortlink.domain.entities import Account, Token

logger = logging.getLogger(__name__)


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, account_id: str) -> Optional[Account]:
        """Get account by ID"""
        try:
            stmt = select(Account).where(Account.id == account_id)
            result = await self.session.exec(stmt)
            return result.one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load account '{account_id}': {e}")
            raise

    async def list_all(self) -> List[Account]:
        """Get all accounts; malformed rows are logged and skipped"""
        try:
            result = await self.session.exec(select(Account).order_by(Account.id))
            records = list(result.all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to list accounts: {e}")
            raise

        accounts = []
        for account in records:
            try:
                account.validate_loaded()
            except EntityLoadError as e:
                logger.warning(f"Skipping account record: {e}")
                continue
            accounts.append(account)
        return accounts

    async def create(self, account: Account) -> Account:
        """Insert a new account"""
        self.session.add(account)
        try:
            await self.session.flush()
        except (IntegrityError, FlushError) as e:
            await self.session.rollback()
            logger.warning(f"Account '{account.id}' already exists")
            raise ConstraintViolation(
                f"Account '{account.id}' already exists", {"id": account.id}
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Failed to insert account '{account.id}': {e}")
            raise
        await self.session.refresh(account)
        return account

    async def update(self, account: Account) -> Account:
        """Update existing account"""
        try:
            self.session.add(account)
            await self.session.flush()
            await self.session.refresh(account)
            return account
        except SQLAlchemyError as e:
            logger.error(f"Failed to update account '{account.id}': {e}")
            raise

    async def delete(self, account: Account) -> None:
        """Hard delete the account and the tokens it owns"""
        try:
            await self.session.execute(
                delete(Token).where(Token.account_id == account.id)
            )
            await self.session.delete(account)
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete account '{account.id}': {e}")
            raise
