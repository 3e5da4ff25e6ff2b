"""
Link Entity

A short key redirecting to a destination URI.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from shortlink.domain.base import EntityLoadError
from .provenance import ProvenanceMetadata


class Link(SQLModel, table=True):
    """
    Link entity - key -> uri redirect.

    Business Rules:
    - key is the primary key; the store enforces its uniqueness on insert
    - expires_at = None means the link never expires
    - an expired link is kept but no longer redirects
    """

    __tablename__ = "links"

    key: str = Field(primary_key=True, max_length=64)
    uri: str = Field(max_length=2048)
    expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True, index=True)
    )

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

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now

    def validate_loaded(self) -> None:
        if not self.key:
            raise EntityLoadError(self.__tablename__, "", "empty key")
        if not self.uri:
            raise EntityLoadError(self.__tablename__, self.key, "empty uri")
