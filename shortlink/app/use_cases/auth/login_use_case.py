"""
Login Use Case

Exchanges an account ID and password for a fresh bearer token.
"""

import logging

from libs.result import Error, Result, Return
from shortlink.app.services.password_hasher import PasswordHasher
from shortlink.app.services.security_context import SecurityContext
from shortlink.app.services.unit_of_work import UnitOfWork
from shortlink.domain.entities import ErrorCode
from shortlink.app.use_cases.accounts.dtos import AccountInfo, TokenInfo
from .dtos import LoginResponse

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for password login.

    Business Rules:
    - Unknown account and wrong password look the same to the caller
      (INVALID_CREDENTIALS) and cost one bcrypt check each
    - Disabled accounts are refused with ACCOUNT_DISABLED
    - Every successful login issues a new token; older tokens stay valid
    """

    def __init__(
        self, uow: UnitOfWork, context: SecurityContext, hasher: PasswordHasher
    ):
        self.uow = uow
        self.context = context
        self.hasher = hasher

    async def execute(self, account_id: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            account_id: Account ID
            password: Plain text password

        Returns:
            Result with LoginResponse containing the account and its new token, or Error
        """
        async with self.uow:
            auth = await self.context.authenticate(account_id, password)
            if auth.is_err():
                code = auth.error.code
                if code == ErrorCode.ACCOUNT_NOT_FOUND:
                    # Keep timing equal to a wrong password
                    self.hasher.dummy_verify()
                if code in (ErrorCode.ACCOUNT_NOT_FOUND, ErrorCode.PASSWORD_INCORRECT):
                    return Return.err(
                        Error(
                            ErrorCode.INVALID_CREDENTIALS,
                            "Invalid account ID or password.",
                        )
                    )
                return Return.err(auth.error)

            token = await self.context.new_token()
            if token.is_err():
                return Return.err(token.error)

            account = await self.context.account()
            if account.is_err():
                return Return.err(account.error)

            response = LoginResponse(
                account=AccountInfo.from_entity(account.value),
                token=TokenInfo.from_entity(token.value),
            )
            await self.uow.commit()

            logger.info(f"Account '{account_id}' logged in")
            return Return.ok(response)
