from abc import ABC, abstractmethod
from typing import List, Optional

from shortlink.domain.entities import Link


class ILinkRepository(ABC):
    """Link repository interface - application layer"""

    @abstractmethod
    async def get_by_key(self, key: str) -> Optional[Link]:
        """Get link by key (exact match)"""
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check whether a key is already taken"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Link]:
        """Get all loadable links, skipping malformed rows"""
        pass

    @abstractmethod
    async def create(self, link: Link) -> Link:
        """Insert a new link. Raises ConstraintViolation if the key is taken."""
        pass

    @abstractmethod
    async def update(self, link: Link) -> Link:
        """Update existing link"""
        pass

    @abstractmethod
    async def delete(self, link: Link) -> None:
        """Hard delete a link"""
        pass
