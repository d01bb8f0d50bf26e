"""Ports for credential hashing and access token handling."""

from abc import ABC, abstractmethod
from typing import Any

from app.domain.entities import User


class PasswordHasher(ABC):
    @abstractmethod
    def hash(self, password: str) -> str:
        ...

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        ...


class TokenService(ABC):
    """Issues and validates bearer tokens."""

    @abstractmethod
    def issue(self, user: User) -> str:
        ...

    @abstractmethod
    def decode(self, token: str) -> dict[str, Any] | None:
        """Return verified claims, or None when the token is invalid or expired."""
        ...
