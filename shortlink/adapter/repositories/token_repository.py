import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import FlushError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from shortlink.app.repositories.errors import ConstraintViolation
from shortlink.app.repositories.token_repository import ITokenRepository
from shortlink.domain.base import EntityLoadError
from shortlink.domain.entities import Token

logger = logging.getLogger(__name__)


class TokenRepository(ITokenRepository):
    """Token repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, token_id: str) -> Optional[Token]:
        """Get token by ID"""
        try:
            stmt = select(Token).where(Token.id == token_id)
            result = await self.session.exec(stmt)
            return result.one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load token: {e}")
            raise

    async def get_by_account_id(self, account_id: str) -> List[Token]:
        """
        Get all tokens of an account.

        A row that fails validation is logged and skipped so one bad
        record does not hide the others.
        """
        try:
            stmt = select(Token).where(Token.account_id == account_id)
            result = await self.session.exec(stmt)
            records = list(result.all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to load tokens of account '{account_id}': {e}")
            raise

        tokens = []
        for token in records:
            try:
                token.validate_loaded()
            except EntityLoadError as e:
                logger.warning(f"Skipping token record of account '{account_id}': {e}")
                continue
            tokens.append(token)

        logger.debug(f"Loaded {len(tokens)} token(s) for account '{account_id}'")
        return tokens

    async def create(self, token: Token) -> Token:
        """Insert a new token"""
        self.session.add(token)
        try:
            await self.session.flush()
        except (IntegrityError, FlushError) as e:
            await self.session.rollback()
            logger.error(f"Token insert for account '{token.account_id}' conflicted")
            raise ConstraintViolation(
                "Token already exists", {"account_id": token.account_id}
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Failed to insert token for account '{token.account_id}': {e}")
            raise
        await self.session.refresh(token)
        return token

    async def update(self, token: Token) -> Token:
        """Update existing token"""
        try:
            self.session.add(token)
            await self.session.flush()
            await self.session.refresh(token)
            return token
        except SQLAlchemyError as e:
            logger.error(f"Failed to update token of account '{token.account_id}': {e}")
            raise
