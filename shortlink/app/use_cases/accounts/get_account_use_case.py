"""
Get Account Use Case

Loads one account by ID, or the caller's own account for "me".
"""

from libs.result import Error, Result, Return
from shortlink.app.services.security_context import SecurityContext
from shortlink.app.services.unit_of_work import UnitOfWork
from shortlink.domain.entities import Account, ErrorCode
from .dtos import AccountInfo

CURRENT_ACCOUNT_ALIAS = "me"


async def resolve_account(
    uow: UnitOfWork, context: SecurityContext, account_ref: str
) -> Result[Account]:
    """Resolve an account reference ("me" or an ID) inside an open unit of work"""
    if account_ref == CURRENT_ACCOUNT_ALIAS:
        return await context.account()

    account = await uow.accounts.get_by_id(account_ref)
    if account is None:
        return Return.err(
            Error(ErrorCode.ACCOUNT_NOT_FOUND, f"Account '{account_ref}' not found")
        )
    return Return.ok(account)


class GetAccountUseCase:
    """
    Use case for reading a single account.

    Business Rules:
    - Caller must be authenticated
    - "me" resolves to the authenticated account
    """

    def __init__(self, uow: UnitOfWork, context: SecurityContext):
        self.uow = uow
        self.context = context

    async def execute(self, account_ref: str) -> Result[AccountInfo]:
        async with self.uow:
            actor = self.context.account_id()
            if actor.is_err():
                return Return.err(actor.error)

            result = await resolve_account(self.uow, self.context, account_ref)
            if result.is_err():
                return Return.err(result.error)

            return Return.ok(AccountInfo.from_entity(result.value))
