import logging

from libs.result import Result, Return
from shortlink.app.services.security_context import SecurityContext
from shortlink.app.services.unit_of_work import UnitOfWork
from .get_link_use_case import load_link

logger = logging.getLogger(__name__)


class DeleteLinkUseCase:
    """Use case for hard-deleting a link; its key becomes available again"""

    def __init__(self, uow: UnitOfWork, context: SecurityContext):
        self.uow = uow
        self.context = context

    async def execute(self, key: str) -> Result[str]:
        async with self.uow:
            actor = self.context.account_id()
            if actor.is_err():
                return Return.err(actor.error)

            result = await load_link(self.uow, key)
            if result.is_err():
                return Return.err(result.error)

            await self.uow.links.delete(result.value)
            await self.uow.commit()

            logger.info(f"Link '{key}' deleted by '{actor.value}'")
            return Return.ok(key)
