"""
Account Tokens Use Case

Lists an account's active tokens or fetches one of them.
"""

from libs.result import Error, Result, Return
from shortlink.app.services.security_context import SecurityContext
from shortlink.app.services.token_lifecycle import TokenLifecycleManager
from shortlink.app.services.unit_of_work import UnitOfWork
from shortlink.domain.entities import ErrorCode
from .dtos import TokenInfo, TokenListResponse
from .get_account_use_case import resolve_account

CURRENT_TOKEN_ALIAS = "current"


class AccountTokensUseCase:
    """
    Use case for reading tokens of an account.

    Business Rules:
    - Caller must be authenticated
    - Listing returns only active (unexpired, unrevoked) tokens
    - "current" is the caller's most recently used active token, and only
      matches when the account is the caller's own
    - A token ID that does not belong to the account is TOKEN_NOT_FOUND
    """

    def __init__(
        self,
        uow: UnitOfWork,
        context: SecurityContext,
        tokens: TokenLifecycleManager,
    ):
        self.uow = uow
        self.context = context
        self.tokens = tokens

    async def list_active(self, account_ref: str) -> Result[TokenListResponse]:
        async with self.uow:
            actor = self.context.account_id()
            if actor.is_err():
                return Return.err(actor.error)

            result = await resolve_account(self.uow, self.context, account_ref)
            if result.is_err():
                return Return.err(result.error)

            active = await self.tokens.active_tokens(result.value.id)
            return Return.ok(
                TokenListResponse(data=[TokenInfo.from_entity(t) for t in active])
            )

    async def get(self, account_ref: str, token_ref: str) -> Result[TokenInfo]:
        async with self.uow:
            actor = self.context.account_id()
            if actor.is_err():
                return Return.err(actor.error)

            result = await resolve_account(self.uow, self.context, account_ref)
            if result.is_err():
                return Return.err(result.error)
            account_id = result.value.id

            if token_ref == CURRENT_TOKEN_ALIAS:
                current = await self.context.token()
                if current.is_err():
                    return Return.err(current.error)
                token = current.value
            else:
                token = next(
                    (
                        t
                        for t in await self.tokens.find_by_account(account_id)
                        if t.id == token_ref
                    ),
                    None,
                )

            if token is None or token.account_id != account_id:
                return Return.err(Error(ErrorCode.TOKEN_NOT_FOUND, "Token not found"))

            return Return.ok(TokenInfo.from_entity(token))
