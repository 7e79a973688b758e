"""
bcrypt password hashing for stored user credentials.
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)


class PasswordHasher:
    """
    Salted bcrypt hashes with a configurable work factor.

    bcrypt only reads the first 72 bytes of its input, so longer passwords
    are refused instead of being silently truncated.
    """

    DEFAULT_ROUNDS = 12
    MIN_ROUNDS = 4
    MAX_ROUNDS = 31
    MAX_PASSWORD_BYTES = 72

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        """
        Args:
            rounds: bcrypt cost factor

        Raises:
            ValueError: If rounds falls outside 4..31
        """
        if rounds < self.MIN_ROUNDS or rounds > self.MAX_ROUNDS:
            raise ValueError(
                f"bcrypt rounds must be in {self.MIN_ROUNDS}..{self.MAX_ROUNDS}, got {rounds}"
            )
        self.rounds = rounds

    def _encode(self, password: str) -> bytes:
        if not isinstance(password, str):
            raise TypeError("Password must be a string")
        if not password:
            raise ValueError("Password cannot be empty")

        raw = password.encode("utf-8")
        if len(raw) > self.MAX_PASSWORD_BYTES:
            raise ValueError(f"Password cannot exceed {self.MAX_PASSWORD_BYTES} bytes")
        return raw

    def hash(self, password: str) -> str:
        """
        Hash a plain-text password.

        Raises:
            TypeError: If password is not a string
            ValueError: If password is empty or longer than 72 bytes
        """
        digest = bcrypt.hashpw(self._encode(password), bcrypt.gensalt(rounds=self.rounds))
        return digest.decode("ascii")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored hash; never raises for bad input."""
        if not password or not password_hash:
            return False

        try:
            return bcrypt.checkpw(self._encode(password), password_hash.encode("utf-8"))
        except (TypeError, ValueError) as e:
            logger.warning(f"Password check rejected input: {e}")
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        """True when the stored hash was made with a different cost factor."""
        try:
            cost = int(password_hash.split("$")[2])
        except (IndexError, ValueError):
            return True
        return cost != self.rounds
