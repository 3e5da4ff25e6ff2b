import logging

from libs.result import Result, Return
from shortlink.app.services.security_context import SecurityContext
from shortlink.app.services.unit_of_work import UnitOfWork
from .get_account_use_case import resolve_account

logger = logging.getLogger(__name__)


class DeleteAccountUseCase:
    """
    Use case for hard-deleting an account.

    Business Rules:
    - Caller must be authenticated
    - The account's tokens are removed with it
    """

    def __init__(self, uow: UnitOfWork, context: SecurityContext):
        self.uow = uow
        self.context = context

    async def execute(self, account_ref: str) -> Result[str]:
        async with self.uow:
            actor = self.context.account_id()
            if actor.is_err():
                return Return.err(actor.error)

            result = await resolve_account(self.uow, self.context, account_ref)
            if result.is_err():
                return Return.err(result.error)
            account_id = result.value.id

            await self.uow.accounts.delete(result.value)
            await self.uow.commit()

            logger.info(f"Account '{account_id}' deleted by '{actor.value}'")
            return Return.ok(account_id)
