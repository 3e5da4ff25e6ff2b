from abc import ABC, abstractmethod
from typing import List, Optional

from shortlink.domain.entities import Token


class ITokenRepository(ABC):
    """Token repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, token_id: str) -> Optional[Token]:
        """Get token by ID (the bearer secret)"""
        pass

    @abstractmethod
    async def get_by_account_id(self, account_id: str) -> List[Token]:
        """Get every token ever issued to an account, expired or not"""
        pass

    @abstractmethod
    async def create(self, token: Token) -> Token:
        """Insert a new token. Raises ConstraintViolation if the ID is taken."""
        pass

    @abstractmethod
    async def update(self, token: Token) -> Token:
        """Update existing token"""
        pass
