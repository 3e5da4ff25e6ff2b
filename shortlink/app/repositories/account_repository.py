from abc import ABC, abstractmethod
from typing import List, Optional

from shortlink.domain.entities import Account


class IAccountRepository(ABC):
    """Account repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, account_id: str) -> Optional[Account]:
        """Get account by ID (exact match)"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Account]:
        """Get all loadable accounts, skipping malformed rows"""
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Insert a new account. Raises ConstraintViolation if the ID is taken."""
        pass

    @abstractmethod
    async def update(self, account: Account) -> Account:
        """Update existing account"""
        pass

    @abstractmethod
    async def delete(self, account: Account) -> None:
        """Hard delete an account together with its tokens"""
        pass
