"""
Authentication Use Cases

Login, logout and token bookkeeping.
"""

from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .mark_token_used_use_case import MarkTokenUsedUseCase
from .dtos import LoginResponse, LogoutResponse

__all__ = [
    # Use Cases
    "LoginUseCase",
    "LogoutUseCase",
    "MarkTokenUsedUseCase",
    # DTOs - Responses
    "LoginResponse",
    "LogoutResponse",
]
