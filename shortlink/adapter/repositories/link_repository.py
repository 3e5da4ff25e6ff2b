import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import FlushError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from shortlink.app.repositories.errors import ConstraintViolation
from shortlink.app.repositories.link_repository import ILinkRepository
from shortlink.domain.base import EntityLoadError
from shortlink.domain.entities import Link

logger = logging.getLogger(__name__)


class LinkRepository(ILinkRepository):
    """Link repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_key(self, key: str) -> Optional[Link]:
        """Get link by key"""
        try:
            stmt = select(Link).where(Link.key == key)
            result = await self.session.exec(stmt)
            return result.one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load link '{key}': {e}")
            raise

    async def exists(self, key: str) -> bool:
        """Check whether a key is already taken"""
        try:
            stmt = select(Link.key).where(Link.key == key)
            result = await self.session.exec(stmt)
            return result.first() is not None
        except SQLAlchemyError as e:
            logger.error(f"Failed to look up link key '{key}': {e}")
            raise

    async def list_all(self) -> List[Link]:
        """Get all links; malformed rows are logged and skipped"""
        try:
            result = await self.session.exec(select(Link).order_by(Link.created_at))
            records = list(result.all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to list links: {e}")
            raise

        links = []
        for link in records:
            try:
                link.validate_loaded()
            except EntityLoadError as e:
                logger.warning(f"Skipping link record: {e}")
                continue
            links.append(link)
        return links

    async def create(self, link: Link) -> Link:
        """
        Insert a new link.

        The primary key is the real uniqueness guarantee; a concurrent
        insert of the same key surfaces here as ConstraintViolation.
        """
        self.session.add(link)
        try:
            await self.session.flush()
        except (IntegrityError, FlushError) as e:
            await self.session.rollback()
            logger.warning(f"Link key '{link.key}' already exists")
            raise ConstraintViolation(
                f"Link key '{link.key}' already exists", {"key": link.key}
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Failed to insert link '{link.key}': {e}")
            raise
        await self.session.refresh(link)
        return link

    async def update(self, link: Link) -> Link:
        """Update existing link"""
        try:
            self.session.add(link)
            await self.session.flush()
            await self.session.refresh(link)
            return link
        except SQLAlchemyError as e:
            logger.error(f"Failed to update link '{link.key}': {e}")
            raise

    async def delete(self, link: Link) -> None:
        """Hard delete a link"""
        try:
            await self.session.delete(link)
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete link '{link.key}': {e}")
            raise
