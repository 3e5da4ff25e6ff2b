"""
Shortlink Domain Entities

One entity per file, plus the shared value types and enums.
"""

from .enums import ErrorCode
from .provenance import ProvenanceMetadata
from .account import Account, BCRYPT_HASH_PATTERN
from .token import Token, REVOKED_AT
from .link import Link

__all__ = [
    # Enums
    "ErrorCode",
    # Value types
    "ProvenanceMetadata",
    # Entities
    "Account",
    "Token",
    "Link",
    # Constants
    "BCRYPT_HASH_PATTERN",
    "REVOKED_AT",
]
