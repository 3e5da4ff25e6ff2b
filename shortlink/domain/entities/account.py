"""
Account Entity

Represents an administrator allowed to manage links and other accounts.
"""

import re
from datetime import datetime

from sqlmodel import Column, DateTime, Field, SQLModel

from shortlink.domain.base import EntityLoadError
from .provenance import ProvenanceMetadata

# bcrypt modular-crypt output: $2b$12$ + 22 chars salt + 31 chars digest
BCRYPT_HASH_PATTERN = re.compile(r"^\$2[abxy]?\$\d{2}\$[./A-Za-z0-9]{53}$")


class Account(SQLModel, table=True):
    """
    Account entity - an administrator identity.

    Business Rules:
    - id is the primary key, never empty, immutable after creation
    - password_hash is always a bcrypt hash, never raw input
    - disabled accounts cannot authenticate, whatever the credential
    - hard delete only (no soft delete)
    """

    __tablename__ = "accounts"

    id: str = Field(primary_key=True, max_length=64)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    disabled: bool = Field(default=False)

    # Attribution
    created_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_by_id: str = Field(max_length=64)
    updated_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    updated_by_id: str = Field(max_length=64)

    @property
    def provenance(self) -> ProvenanceMetadata:
        return ProvenanceMetadata(
            created_at=self.created_at,
            created_by_id=self.created_by_id,
            updated_at=self.updated_at,
            updated_by_id=self.updated_by_id,
        )

    def set_provenance(self, value: ProvenanceMetadata) -> None:
        self.created_at = value.created_at
        self.created_by_id = value.created_by_id
        self.updated_at = value.updated_at or value.created_at
        self.updated_by_id = value.updated_by_id or value.created_by_id

    def validate_loaded(self) -> None:
        if not self.id:
            raise EntityLoadError(self.__tablename__, "", "empty id")
        if not self.password_hash or not BCRYPT_HASH_PATTERN.fullmatch(self.password_hash):
            raise EntityLoadError(
                self.__tablename__, self.id, "password is not in hash format"
            )
