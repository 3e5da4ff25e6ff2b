"""
Authentication DTOs (Data Transfer Objects)
"""

from pydantic import BaseModel

from shortlink.app.use_cases.accounts.dtos import AccountInfo, TokenInfo


class LoginResponse(BaseModel):
    """Response for successful login"""

    account: AccountInfo
    token: TokenInfo


class LogoutResponse(BaseModel):
    """Response for logout"""

    message: str
    revoked_count: int
