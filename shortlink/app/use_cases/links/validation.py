"""
Field checks shared by link create and update.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from urllib.parse import urlparse

from libs.result import Error, Result, Return
from shortlink.domain.entities import ErrorCode

ALLOWED_SCHEMES = ("http", "https")
MAX_URI_LENGTH = 2048


def validate_uri(uri: str) -> Optional[Error]:
    if not uri or len(uri) > MAX_URI_LENGTH:
        return Error(
            ErrorCode.INVALID_FIELDS,
            f"URI must be between 1 and {MAX_URI_LENGTH} characters",
        )
    parsed = urlparse(uri)
    if parsed.scheme not in ALLOWED_SCHEMES or not parsed.netloc:
        return Error(ErrorCode.INVALID_FIELDS, "URI must be an absolute http(s) URL")
    return None


def resolve_expiry(
    expires_at: Optional[datetime], ttl_minutes: Optional[int], now: datetime
) -> Result[Optional[datetime]]:
    """
    Turn expires_at / ttl_minutes into a naive UTC expiry.

    Returns:
        Result with the expiry (None = never), or Error INVALID_FIELDS
    """
    if expires_at is not None and ttl_minutes is not None:
        return Return.err(
            Error(ErrorCode.INVALID_FIELDS, "Give either expires_at or ttl_minutes, not both")
        )

    if ttl_minutes is not None:
        if ttl_minutes < 0:
            return Return.err(
                Error(ErrorCode.INVALID_FIELDS, "ttl_minutes cannot be negative")
            )
        if ttl_minutes == 0:
            return Return.ok(None)
        return Return.ok(now + timedelta(minutes=ttl_minutes))

    if expires_at is not None and expires_at.tzinfo is not None:
        expires_at = expires_at.astimezone(timezone.utc).replace(tzinfo=None)
    return Return.ok(expires_at)
