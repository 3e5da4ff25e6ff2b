"""
Link Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from shortlink.app.use_cases.pagination import PaginationInfo
from shortlink.domain.entities import Link


# ============================================================================
# Command DTOs
# ============================================================================


class CreateLinkCommand(BaseModel):
    """
    Intent to create a link.

    key: caller-chosen key, generated when omitted
    expires_at / ttl_minutes: at most one; ttl_minutes=0 means never expires
    """

    uri: str
    key: Optional[str] = None
    expires_at: Optional[datetime] = None
    ttl_minutes: Optional[int] = None


class UpdateLinkCommand(BaseModel):
    """Partial link update; None leaves a field unchanged, ttl_minutes=0 clears expiry"""

    uri: Optional[str] = None
    expires_at: Optional[datetime] = None
    ttl_minutes: Optional[int] = None


# ============================================================================
# Response DTOs
# ============================================================================


class LinkInfo(BaseModel):
    """Public link representation"""

    key: str
    uri: str
    expires_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    created_by_id: str
    updated_by_id: str

    @classmethod
    def from_entity(cls, link: Link) -> "LinkInfo":
        provenance = link.provenance
        return cls(
            key=link.key,
            uri=link.uri,
            expires_at=link.expires_at,
            created_at=provenance.created_at,
            updated_at=provenance.updated_at,
            created_by_id=provenance.created_by_id,
            updated_by_id=provenance.updated_by_id,
        )


class LinkListResponse(BaseModel):
    data: List[LinkInfo]
    pagination: PaginationInfo
