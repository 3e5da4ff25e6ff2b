"""
Update Account Use Case

Changes an account's password and/or disabled flag.
"""

import logging

from libs.result import Error, Result, Return
from shortlink.app.services.clock import Clock
from shortlink.app.services.password_hasher import PasswordHasher
from shortlink.app.services.security_context import SecurityContext
from shortlink.app.services.unit_of_work import UnitOfWork
from shortlink.domain.entities import ErrorCode
from .dtos import AccountInfo, UpdateAccountCommand
from .get_account_use_case import resolve_account

logger = logging.getLogger(__name__)


class UpdateAccountUseCase:
    """
    Use case for updating accounts.

    Business Rules:
    - Caller must be authenticated; they become the updater
    - Omitted fields keep their value
    - A disabled account keeps its tokens, but they stop authenticating
    """

    def __init__(
        self,
        uow: UnitOfWork,
        context: SecurityContext,
        hasher: PasswordHasher,
        clock: Clock,
        min_password_length: int = 8,
    ):
        self.uow = uow
        self.context = context
        self.hasher = hasher
        self.clock = clock
        self.min_password_length = min_password_length

    async def execute(
        self, account_ref: str, command: UpdateAccountCommand
    ) -> Result[AccountInfo]:
        async with self.uow:
            actor = self.context.account_id()
            if actor.is_err():
                return Return.err(actor.error)

            result = await resolve_account(self.uow, self.context, account_ref)
            if result.is_err():
                return Return.err(result.error)
            account = result.value

            if command.password is not None:
                if (
                    not self.hasher.is_already_hashed(command.password)
                    and len(command.password) < self.min_password_length
                ):
                    return Return.err(
                        Error(
                            ErrorCode.INVALID_FIELDS,
                            f"Password must be at least {self.min_password_length} characters",
                        )
                    )
                account.password_hash = self.hasher.prepare(command.password)

            if command.disabled is not None:
                account.disabled = command.disabled

            account.set_provenance(
                account.provenance.touched(actor.value, self.clock.now())
            )
            account = await self.uow.accounts.update(account)

            info = AccountInfo.from_entity(account)
            await self.uow.commit()

            logger.info(f"Account '{account.id}' updated by '{actor.value}'")
            return Return.ok(info)
