"""
Account Use Case DTOs (Data Transfer Objects)

Commands in, responses out. Password hashes never leave the application layer.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from shortlink.app.use_cases.pagination import PaginationInfo
from shortlink.domain.entities import Account, Token


# ============================================================================
# Command DTOs
# ============================================================================


class CreateAccountCommand(BaseModel):
    """Validated intent to create an account"""

    id: str
    password: str
    disabled: bool = False


class UpdateAccountCommand(BaseModel):
    """Partial account update; None leaves a field unchanged"""

    password: Optional[str] = None
    disabled: Optional[bool] = None


# ============================================================================
# Response DTOs
# ============================================================================


class AccountInfo(BaseModel):
    """Public account representation"""

    id: str
    disabled: bool
    created_at: datetime
    updated_at: datetime
    created_by_id: str
    updated_by_id: str

    @classmethod
    def from_entity(cls, account: Account) -> "AccountInfo":
        provenance = account.provenance
        return cls(
            id=account.id,
            disabled=account.disabled,
            created_at=provenance.created_at,
            updated_at=provenance.updated_at,
            created_by_id=provenance.created_by_id,
            updated_by_id=provenance.updated_by_id,
        )


class TokenInfo(BaseModel):
    """Bearer token representation"""

    id: str
    account_id: str
    expires_at: datetime
    last_used_at: Optional[datetime] = None
    created_at: datetime
    created_by_id: str

    @classmethod
    def from_entity(cls, token: Token) -> "TokenInfo":
        return cls(
            id=token.id,
            account_id=token.account_id,
            expires_at=token.expires_at,
            last_used_at=token.last_used_at,
            created_at=token.created_at,
            created_by_id=token.created_by_id,
        )


class AccountListResponse(BaseModel):
    data: List[AccountInfo]
    pagination: PaginationInfo


class TokenListResponse(BaseModel):
    data: List[TokenInfo]
