"""HS256 bearer tokens signed with python-jose."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from app.application.interfaces import TokenService
from app.domain.entities import User

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class JoseTokenService(TokenService):
    """Issues tokens carrying ``sub``, ``email``, ``name`` and ``role`` claims."""

    def __init__(self, secret: str, issuer: str, audience: str, expire_days: int = 7):
        self._secret = secret
        self._issuer = issuer
        self._audience = audience
        self._expire = timedelta(days=expire_days)

    def issue(self, user: User) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(user.id),
            "email": user.email,
            "name": user.full_name,
            "role": user.role_name or "",
            "iss": self._issuer,
            "aud": self._audience,
            "iat": int(now.timestamp()),
            "exp": int((now + self._expire).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def decode(self, token: str) -> dict[str, Any] | None:
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                audience=self._audience,
                issuer=self._issuer,
            )
        except JWTError as exc:
            logger.debug("Rejected bearer token: %s", exc)
            return None
