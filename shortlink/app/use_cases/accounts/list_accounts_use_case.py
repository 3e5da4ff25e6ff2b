from typing import Optional

from libs.result import Result, Return
from shortlink.app.services.security_context import SecurityContext
from shortlink.app.services.unit_of_work import UnitOfWork
from shortlink.app.use_cases.pagination import paginate
from .dtos import AccountInfo, AccountListResponse


class ListAccountsUseCase:
    """Use case for listing accounts page by page (authenticated callers only)"""

    def __init__(self, uow: UnitOfWork, context: SecurityContext):
        self.uow = uow
        self.context = context

    async def execute(
        self, page: int = 1, rows: Optional[int] = None
    ) -> Result[AccountListResponse]:
        async with self.uow:
            actor = self.context.account_id()
            if actor.is_err():
                return Return.err(actor.error)

            accounts = await self.uow.accounts.list_all()

            paged = paginate(accounts, page, rows)
            if paged.is_err():
                return Return.err(paged.error)
            items, pagination = paged.value

            return Return.ok(
                AccountListResponse(
                    data=[AccountInfo.from_entity(a) for a in items],
                    pagination=pagination,
                )
            )
