"""Password hashing backed by passlib's PBKDF2-SHA256."""

from passlib.hash import pbkdf2_sha256 as hasher

from app.application.interfaces import PasswordHasher


class Pbkdf2PasswordHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return hasher.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        if not password or not password_hash:
            return False
        try:
            return hasher.verify(password, password_hash)
        except ValueError:
            # Malformed stored hash.
            return False
