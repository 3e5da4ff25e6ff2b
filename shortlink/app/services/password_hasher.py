"""
Password Hasher

bcrypt hashing for account credentials.
"""

import bcrypt

from shortlink.domain.entities import BCRYPT_HASH_PATTERN

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """
    One-way adaptive password hashing.

    Business Rules:
    - Cost factor and salt are embedded in the hash (bcrypt modular crypt format)
    - Verification never raises on a malformed stored hash
    - Values already in bcrypt format are stored as-is (migrated data)
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        if not plaintext:
            raise ValueError("Password must be a non-empty string")
        hashed = bcrypt.hashpw(self._encode(plaintext), bcrypt.gensalt(self.rounds))
        return hashed.decode("utf-8")

    def verify(self, plaintext: str, hashed: str) -> bool:
        if not plaintext or not hashed:
            return False
        try:
            return bcrypt.checkpw(self._encode(plaintext), hashed.encode("utf-8"))
        except ValueError:
            # Malformed salt or hash
            return False

    def dummy_verify(self) -> None:
        """Spend one hash of work so unknown accounts cost as much as wrong passwords"""
        bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(self.rounds))

    def is_already_hashed(self, value: str) -> bool:
        return bool(value) and BCRYPT_HASH_PATTERN.fullmatch(value) is not None

    def prepare(self, value: str) -> str:
        """
        Turn an incoming credential into what gets stored.

        Args:
            value: Plain text password or an existing bcrypt hash

        Returns:
            value unchanged if already hashed, otherwise its bcrypt hash
        """
        if self.is_already_hashed(value):
            return value
        return self.hash(value)

    @staticmethod
    def _encode(plaintext: str) -> bytes:
        return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]
