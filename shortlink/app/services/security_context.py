"""
Security Context

Resolves who is acting for the duration of one request.
"""

import logging
from datetime import datetime
from typing import Optional

from libs.result import Error, Result, Return
from shortlink.app.services.password_hasher import PasswordHasher
from shortlink.app.services.token_lifecycle import TokenLifecycleManager
from shortlink.app.services.unit_of_work import UnitOfWork
from shortlink.domain.entities import Account, ErrorCode, Token

logger = logging.getLogger(__name__)


class SecurityContext:
    """
    Per-request authentication state: Unauthenticated or Authenticated(account_id).

    Business Rules:
    - One instance per request, never shared across requests
    - Authenticates at most once; a failed attempt leaves the state unchanged
    - Disabled accounts never authenticate, whatever the credential
    - Token authentication does NOT mark the token used; the request
      middleware does that once the request has succeeded
    - Deauthentication revokes every active token of the account. It is not
      atomic with concurrent issuance: a token issued meanwhile stays active.

    Store calls go through the caller's open unit of work.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        tokens: TokenLifecycleManager,
        hasher: PasswordHasher,
    ):
        self.uow = uow
        self.tokens = tokens
        self.hasher = hasher
        self._account_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self._account_id is not None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def authenticate(self, account_id: str, password: str) -> Result[str]:
        """
        Authenticate with an account ID and password.

        Returns:
            Result with the authenticated account ID, or Error
            ACCOUNT_NOT_FOUND / ACCOUNT_DISABLED / PASSWORD_INCORRECT
        """
        if self.is_authenticated:
            return self._already_authenticated()

        account = await self.uow.accounts.get_by_id(account_id)
        if account is None:
            logger.info(f"Login failed: account '{account_id}' not found")
            return Return.err(
                Error(ErrorCode.ACCOUNT_NOT_FOUND, f"Account '{account_id}' not found")
            )
        return await self.authenticate_account(account, password)

    async def authenticate_account(self, account: Account, password: str) -> Result[str]:
        """Authenticate an already loaded account with a password"""
        if self.is_authenticated:
            return self._already_authenticated()

        if account.disabled:
            logger.info(f"Login refused: account '{account.id}' is disabled")
            return Return.err(Error(ErrorCode.ACCOUNT_DISABLED, "Account is disabled"))

        if not self.hasher.verify(password, account.password_hash):
            logger.info(f"Login failed: wrong password for account '{account.id}'")
            return Return.err(
                Error(ErrorCode.PASSWORD_INCORRECT, "Password is incorrect")
            )

        self._account_id = account.id
        return Return.ok(account.id)

    async def authenticate_token_id(self, token_id: str) -> Result[str]:
        """Authenticate with a bearer token given by its ID"""
        if self.is_authenticated:
            return self._already_authenticated()

        result = await self.tokens.get(token_id)
        if result.is_err():
            return Return.err(result.error)
        return await self.authenticate_token(result.value)

    async def authenticate_token(self, token: Token) -> Result[str]:
        """
        Authenticate with an already loaded bearer token.

        Returns:
            Result with the owning account ID, or Error
            TOKEN_EXPIRED / ACCOUNT_NOT_FOUND / ACCOUNT_DISABLED
        """
        if self.is_authenticated:
            return self._already_authenticated()

        if self.tokens.is_expired(token):
            return Return.err(Error(ErrorCode.TOKEN_EXPIRED, "Token has expired"))

        account = await self.uow.accounts.get_by_id(token.account_id)
        if account is None:
            logger.warning(f"Token owner '{token.account_id}' no longer exists")
            return Return.err(
                Error(
                    ErrorCode.ACCOUNT_NOT_FOUND,
                    f"Account '{token.account_id}' not found",
                )
            )
        if account.disabled:
            return Return.err(Error(ErrorCode.ACCOUNT_DISABLED, "Account is disabled"))

        self._account_id = account.id
        return Return.ok(account.id)

    async def deauthenticate(self) -> Result[int]:
        """
        Revoke every active token of the current account and drop the identity.

        Returns:
            Result with the number of revoked tokens, or Error NOT_AUTHENTICATED
        """
        id_result = self.account_id()
        if id_result.is_err():
            return Return.err(id_result.error)

        active = await self.tokens.active_tokens(id_result.value)
        for token in active:
            await self.tokens.revoke(token)

        self._account_id = None
        logger.info(f"Account '{id_result.value}' logged out, {len(active)} token(s) revoked")
        return Return.ok(len(active))

    # ------------------------------------------------------------------
    # Accessors (valid only while authenticated)
    # ------------------------------------------------------------------

    def account_id(self) -> Result[str]:
        if self._account_id is None:
            logger.warning("Attempted to access account ID without authentication")
            return self._not_authenticated()
        return Return.ok(self._account_id)

    async def account(self) -> Result[Account]:
        """The current account, re-read from the store on every call"""
        id_result = self.account_id()
        if id_result.is_err():
            return Return.err(id_result.error)

        account = await self.uow.accounts.get_by_id(id_result.value)
        if account is None:
            return Return.err(
                Error(
                    ErrorCode.ACCOUNT_NOT_FOUND,
                    f"Account '{id_result.value}' not found",
                )
            )
        return Return.ok(account)

    async def new_token(self) -> Result[Token]:
        id_result = self.account_id()
        if id_result.is_err():
            return Return.err(id_result.error)
        token = await self.tokens.issue(id_result.value)
        return Return.ok(token)

    async def token(self, token_id: Optional[str] = None) -> Result[Optional[Token]]:
        """
        Look up a token of the current account.

        Without token_id: the active token used most recently. Tokens never
        used rank oldest; ties go to the lexicographically smallest id.
        With token_id: that token if it belongs to the current account.

        Returns:
            Result with the token or None (absence is not an error), or
            Error NOT_AUTHENTICATED
        """
        id_result = self.account_id()
        if id_result.is_err():
            return Return.err(id_result.error)
        account_id = id_result.value

        if token_id is None:
            latest = None
            for candidate in await self.tokens.active_tokens(account_id):
                if latest is None or _more_recent(candidate, latest):
                    latest = candidate
            return Return.ok(latest)

        token = await self.uow.tokens.get_by_id(token_id)
        if token is None or token.account_id != account_id:
            return Return.ok(None)
        return Return.ok(token)

    @staticmethod
    def _not_authenticated() -> Result:
        return Return.err(Error(ErrorCode.NOT_AUTHENTICATED, "Not authenticated"))

    def _already_authenticated(self) -> Result:
        return Return.err(
            Error(
                ErrorCode.ALREADY_AUTHENTICATED,
                f"Context is already authenticated as '{self._account_id}'",
            )
        )


def _more_recent(token: Token, other: Token) -> bool:
    """Later last use wins; never used counts as oldest; ties go to the smaller id"""
    used_at = token.last_used_at or datetime.min
    other_used_at = other.last_used_at or datetime.min
    if used_at != other_used_at:
        return used_at > other_used_at
    return token.id < other.id
