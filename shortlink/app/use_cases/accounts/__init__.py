"""
Account Use Cases

Account administration for authenticated callers.
"""

from .list_accounts_use_case import ListAccountsUseCase
from .get_account_use_case import GetAccountUseCase, resolve_account
from .create_account_use_case import CreateAccountUseCase
from .update_account_use_case import UpdateAccountUseCase
from .delete_account_use_case import DeleteAccountUseCase
from .account_tokens_use_case import AccountTokensUseCase
from .dtos import (
    AccountInfo,
    AccountListResponse,
    CreateAccountCommand,
    TokenInfo,
    TokenListResponse,
    UpdateAccountCommand,
)

__all__ = [
    # Use Cases
    "ListAccountsUseCase",
    "GetAccountUseCase",
    "CreateAccountUseCase",
    "UpdateAccountUseCase",
    "DeleteAccountUseCase",
    "AccountTokensUseCase",
    "resolve_account",
    # DTOs - Commands
    "CreateAccountCommand",
    "UpdateAccountCommand",
    # DTOs - Responses
    "AccountInfo",
    "AccountListResponse",
    "TokenInfo",
    "TokenListResponse",
]
