"""
Shortlink Domain Enums

Error codes carried by Result errors across the application layer.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Expected failure kinds"""

    # Credential path
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    ACCOUNT_DISABLED = "ACCOUNT_DISABLED"
    PASSWORD_INCORRECT = "PASSWORD_INCORRECT"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Token path
    TOKEN_NOT_FOUND = "TOKEN_NOT_FOUND"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    MISSING_OR_INVALID_TOKEN = "MISSING_OR_INVALID_TOKEN"

    # Context state
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    ALREADY_AUTHENTICATED = "ALREADY_AUTHENTICATED"

    # Link keys
    KEY_ALREADY_EXISTS = "KEY_ALREADY_EXISTS"
    KEY_GENERATION_EXHAUSTED = "KEY_GENERATION_EXHAUSTED"
    INVALID_KEY = "INVALID_KEY"

    # Resources
    ACCOUNT_ALREADY_EXISTS = "ACCOUNT_ALREADY_EXISTS"
    LINK_NOT_FOUND = "LINK_NOT_FOUND"
    LINK_EXPIRED = "LINK_EXPIRED"
    INVALID_FIELDS = "INVALID_FIELDS"
    INVALID_PAGINATION_PARAMETERS = "INVALID_PAGINATION_PARAMETERS"

    def __str__(self) -> str:
        return self.value
