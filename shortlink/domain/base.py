from datetime import UTC, datetime


def utcnow() -> datetime:
    """Naive UTC timestamp, the form SQLite stores and returns"""
    return datetime.now(UTC).replace(tzinfo=None)


class EntityLoadError(Exception):
    """Raised when a persisted row breaks an entity invariant"""

    def __init__(self, table: str, key: str, reason: str):
        self.table = table
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid '{table}' record '{key}': {reason}")
