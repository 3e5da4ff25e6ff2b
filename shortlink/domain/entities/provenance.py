"""
ProvenanceMetadata Value Type

Who created a record and who touched it last, embedded by value in
each persisted entity.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ProvenanceMetadata:
    """
    Attribution metadata - immutable value.

    Business Rules:
    - created_* never change once set
    - updated_* are replaced on every mutation via touched()
    - actor ids are informational back-references, not owned relations
    """

    created_at: datetime
    created_by_id: str
    updated_at: Optional[datetime] = None
    updated_by_id: Optional[str] = None

    @classmethod
    def created(cls, actor_id: str, at: datetime) -> "ProvenanceMetadata":
        return cls(
            created_at=at,
            created_by_id=actor_id,
            updated_at=at,
            updated_by_id=actor_id,
        )

    def touched(self, actor_id: str, at: datetime) -> "ProvenanceMetadata":
        return replace(self, updated_at=at, updated_by_id=actor_id)
