from .password_hasher import Pbkdf2PasswordHasher
from .jwt_token_service import JoseTokenService

__all__ = ["Pbkdf2PasswordHasher", "JoseTokenService"]
