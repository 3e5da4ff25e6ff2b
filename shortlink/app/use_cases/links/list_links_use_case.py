from typing import Optional

from libs.result import Result, Return
from shortlink.app.services.security_context import SecurityContext
from shortlink.app.services.unit_of_work import UnitOfWork
from shortlink.app.use_cases.pagination import paginate
from .dtos import LinkInfo, LinkListResponse


class ListLinksUseCase:
    """Use case for listing links page by page, expired ones included"""

    def __init__(self, uow: UnitOfWork, context: SecurityContext):
        self.uow = uow
        self.context = context

    async def execute(
        self, page: int = 1, rows: Optional[int] = None
    ) -> Result[LinkListResponse]:
        async with self.uow:
            actor = self.context.account_id()
            if actor.is_err():
                return Return.err(actor.error)

            links = await self.uow.links.list_all()

            paged = paginate(links, page, rows)
            if paged.is_err():
                return Return.err(paged.error)
            items, pagination = paged.value

            return Return.ok(
                LinkListResponse(
                    data=[LinkInfo.from_entity(link) for link in items],
                    pagination=pagination,
                )
            )
