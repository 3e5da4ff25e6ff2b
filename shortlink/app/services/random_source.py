import secrets
from abc import ABC, abstractmethod


class RandomSource(ABC):
    """Cryptographically secure random bytes"""

    @abstractmethod
    def token_bytes(self, n: int) -> bytes:
        pass


class SecureRandomSource(RandomSource):
    """RandomSource backed by the OS CSPRNG"""

    def token_bytes(self, n: int) -> bytes:
        return secrets.token_bytes(n)
