"""
Token Entity

Opaque bearer tokens issued on login.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from shortlink.domain.base import EntityLoadError
from .provenance import ProvenanceMetadata

# Revoked tokens are force-expired to this instant instead of being deleted
REVOKED_AT = datetime(1993, 4, 29)


class Token(SQLModel, table=True):
    """
    Token entity - the id is the bearer secret itself.

    Business Rules:
    - id is 16 secure random bytes, hex encoded
    - expires_at is always set (default now + TOKEN_TTL_MINUTES)
    - a token is expired at or after expires_at
    - revocation sets expires_at to REVOKED_AT (idempotent, keeps the row)
    - last_used_at is refreshed after each successful authenticated request
    """

    __tablename__ = "tokens"

    id: str = Field(primary_key=True, max_length=64)
    account_id: str = Field(foreign_key="accounts.id", index=True, max_length=64)

    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    last_used_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )

    # Attribution
    created_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_by_id: str = Field(max_length=64)

    __table_args__ = (Index("idx_token_expires_at", "expires_at"),)

    @property
    def provenance(self) -> ProvenanceMetadata:
        return ProvenanceMetadata(
            created_at=self.created_at, created_by_id=self.created_by_id
        )

    def set_provenance(self, value: ProvenanceMetadata) -> None:
        self.created_at = value.created_at
        self.created_by_id = value.created_by_id

    def is_revoked(self) -> bool:
        return self.expires_at == REVOKED_AT

    def validate_loaded(self) -> None:
        if not self.id:
            raise EntityLoadError(self.__tablename__, "", "empty id")
        if not self.account_id:
            raise EntityLoadError(self.__tablename__, self.id, "missing account_id")
        if not isinstance(self.expires_at, datetime):
            raise EntityLoadError(self.__tablename__, self.id, "missing expires_at")
