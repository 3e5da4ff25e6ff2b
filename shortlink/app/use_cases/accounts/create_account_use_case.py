"""
Create Account Use Case

Creates an administrator account on behalf of the authenticated actor.
"""

import logging
import re

from libs.result import Error, Result, Return
from shortlink.app.repositories.errors import ConstraintViolation
from shortlink.app.services.clock import Clock
from shortlink.app.services.password_hasher import PasswordHasher
from shortlink.app.services.security_context import SecurityContext
from shortlink.app.services.unit_of_work import UnitOfWork
from shortlink.domain.entities import Account, ErrorCode, ProvenanceMetadata
from .dtos import AccountInfo, CreateAccountCommand
from .get_account_use_case import CURRENT_ACCOUNT_ALIAS

logger = logging.getLogger(__name__)


class CreateAccountUseCase:
    """
    Use case for creating accounts.

    Business Rules:
    - Caller must be authenticated; they are recorded as creator and updater
    - ID must match ACCOUNT_ID_PATTERN and cannot be "me"
    - Plain passwords must be at least MIN_PASSWORD_LENGTH long
    - Passwords already in bcrypt format are stored as-is
    - Duplicate IDs fail with ACCOUNT_ALREADY_EXISTS (pre-check and on insert)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        context: SecurityContext,
        hasher: PasswordHasher,
        clock: Clock,
        id_pattern: str = r"^[a-zA-Z0-9_\-]+$",
        min_password_length: int = 8,
    ):
        self.uow = uow
        self.context = context
        self.hasher = hasher
        self.clock = clock
        self.id_pattern = re.compile(id_pattern)
        self.min_password_length = min_password_length

    async def execute(self, command: CreateAccountCommand) -> Result[AccountInfo]:
        async with self.uow:
            actor = self.context.account_id()
            if actor.is_err():
                return Return.err(actor.error)

            invalid = self._validate(command)
            if invalid is not None:
                return Return.err(invalid)

            if await self.uow.accounts.get_by_id(command.id) is not None:
                return self._already_exists(command.id)

            account = Account(
                id=command.id,
                password_hash=self.hasher.prepare(command.password),
                disabled=command.disabled,
            )
            account.set_provenance(
                ProvenanceMetadata.created(actor.value, self.clock.now())
            )

            try:
                account = await self.uow.accounts.create(account)
            except ConstraintViolation:
                return self._already_exists(command.id)

            info = AccountInfo.from_entity(account)
            await self.uow.commit()

            logger.info(f"Account '{command.id}' created by '{actor.value}'")
            return Return.ok(info)

    def _validate(self, command: CreateAccountCommand):
        if not command.id or not self.id_pattern.fullmatch(command.id):
            return Error(ErrorCode.INVALID_FIELDS, "ID contains invalid characters")
        if command.id == CURRENT_ACCOUNT_ALIAS:
            return Error(
                ErrorCode.INVALID_FIELDS, f"ID cannot be '{CURRENT_ACCOUNT_ALIAS}'"
            )
        if (
            not self.hasher.is_already_hashed(command.password)
            and len(command.password) < self.min_password_length
        ):
            return Error(
                ErrorCode.INVALID_FIELDS,
                f"Password must be at least {self.min_password_length} characters",
            )
        return None

    @staticmethod
    def _already_exists(account_id: str) -> Result:
        return Return.err(
            Error(ErrorCode.ACCOUNT_ALREADY_EXISTS, f"Account '{account_id}' already exists")
        )
