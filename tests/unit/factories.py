from datetime import datetime, timedelta

from shortlink.app.services.clock import Clock
from shortlink.app.services.random_source import RandomSource
from shortlink.domain.entities import Account, Link, ProvenanceMetadata, Token

NOW = datetime(2024, 1, 1, 12, 0, 0)


class FakeClock(Clock):
    def __init__(self, now: datetime = NOW):
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs):
        self.current += timedelta(**kwargs)


class FakeRandomSource(RandomSource):
    """Hands out queued byte strings, then falls back to zero bytes"""

    def __init__(self, *chunks: bytes):
        self.chunks = list(chunks)
        self.calls = 0

    def queue(self, *chunks: bytes):
        self.chunks.extend(chunks)

    def token_bytes(self, n: int) -> bytes:
        self.calls += 1
        if self.chunks:
            chunk = self.chunks.pop(0)
            assert len(chunk) == n
            return chunk
        return bytes(n)


def make_account(account_id: str, password_hash: str, disabled: bool = False) -> Account:
    account = Account(id=account_id, password_hash=password_hash, disabled=disabled)
    account.set_provenance(ProvenanceMetadata.created("bootstrap", NOW))
    return account


def make_token(
    token_id: str,
    account_id: str,
    expires_at: datetime,
    last_used_at: datetime = None,
) -> Token:
    token = Token(
        id=token_id,
        account_id=account_id,
        expires_at=expires_at,
        last_used_at=last_used_at,
    )
    token.set_provenance(ProvenanceMetadata.created(account_id, NOW))
    return token


def make_link(key: str, uri: str = "https://example.com", expires_at: datetime = None) -> Link:
    link = Link(key=key, uri=uri, expires_at=expires_at)
    link.set_provenance(ProvenanceMetadata.created("alice", NOW))
    return link
