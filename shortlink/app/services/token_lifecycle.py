"""
Token Lifecycle Manager

Issues, inspects, marks used and revokes bearer tokens.
"""

import logging
from datetime import timedelta
from typing import List, Optional

from libs.result import Error, Result, Return
from shortlink.app.services.clock import Clock
from shortlink.app.services.random_source import RandomSource
from shortlink.app.services.unit_of_work import UnitOfWork
from shortlink.domain.entities import REVOKED_AT, ErrorCode, ProvenanceMetadata, Token

logger = logging.getLogger(__name__)

TOKEN_BYTES = 16


class TokenLifecycleManager:
    """
    Bearer token lifecycle.

    Business Rules:
    - Token ids carry 16 bytes of secure randomness, hex encoded
    - expires_at = now + ttl at issuance
    - Revocation marks the token used, then force-expires it to REVOKED_AT
    - Tokens are never deleted here
    - Store failures propagate as exceptions, never as auth failures

    Callers must hold the unit of work open (async with uow).
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Clock,
        random_source: RandomSource,
        ttl: timedelta = timedelta(minutes=60),
    ):
        self.uow = uow
        self.clock = clock
        self.random_source = random_source
        self.ttl = ttl

    async def issue(self, account_id: str, created_by_id: Optional[str] = None) -> Token:
        now = self.clock.now()
        token = Token(
            id=self.random_source.token_bytes(TOKEN_BYTES).hex(),
            account_id=account_id,
            expires_at=now + self.ttl,
            last_used_at=None,
        )
        token.set_provenance(ProvenanceMetadata.created(created_by_id or account_id, now))
        token = await self.uow.tokens.create(token)
        logger.debug(f"Issued token for account '{account_id}', expires {token.expires_at}")
        return token

    async def get(self, token_id: str) -> Result[Token]:
        token = await self.uow.tokens.get_by_id(token_id)
        if token is None:
            return Return.err(Error(ErrorCode.TOKEN_NOT_FOUND, "Token not found"))
        return Return.ok(token)

    async def find_by_account(self, account_id: str) -> List[Token]:
        return await self.uow.tokens.get_by_account_id(account_id)

    async def active_tokens(self, account_id: str) -> List[Token]:
        tokens = await self.find_by_account(account_id)
        return [token for token in tokens if not self.is_expired(token)]

    async def mark_used(self, token: Token) -> Token:
        token.last_used_at = self.clock.now()
        return await self.uow.tokens.update(token)

    async def revoke(self, token: Token) -> Token:
        token.last_used_at = self.clock.now()
        token.expires_at = REVOKED_AT
        token = await self.uow.tokens.update(token)
        logger.info(f"Revoked token of account '{token.account_id}'")
        return token

    def is_expired(self, token: Token) -> bool:
        return token.expires_at <= self.clock.now()
