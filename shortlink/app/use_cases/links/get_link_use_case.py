from libs.result import Error, Result, Return
from shortlink.app.services.security_context import SecurityContext
from shortlink.app.services.unit_of_work import UnitOfWork
from shortlink.domain.entities import ErrorCode, Link
from .dtos import LinkInfo


async def load_link(uow: UnitOfWork, key: str) -> Result[Link]:
    """Load a link by key inside an open unit of work"""
    link = await uow.links.get_by_key(key)
    if link is None:
        return Return.err(Error(ErrorCode.LINK_NOT_FOUND, f"Link '{key}' not found"))
    return Return.ok(link)


class GetLinkUseCase:
    """Use case for reading one link; expired links are still returned"""

    def __init__(self, uow: UnitOfWork, context: SecurityContext):
        self.uow = uow
        self.context = context

    async def execute(self, key: str) -> Result[LinkInfo]:
        async with self.uow:
            actor = self.context.account_id()
            if actor.is_err():
                return Return.err(actor.error)

            result = await load_link(self.uow, key)
            if result.is_err():
                return Return.err(result.error)

            return Return.ok(LinkInfo.from_entity(result.value))
