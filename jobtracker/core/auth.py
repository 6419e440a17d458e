"""
Identity provider used by the remote store and the data service.

The session is probed on every call; nothing here caches whether a user is
signed in.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from jobtracker.core.errors import AuthenticationRequired
from jobtracker.core.security import create_access_token, decode_access_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSession:
    """An active session for one identity."""
    user_id: str
    email: Optional[str] = None


class AuthProvider(ABC):
    """Remote identity provider."""

    @abstractmethod
    async def get_session(self) -> Optional[AuthSession]:
        """Return the current session, or None when signed out."""

    async def get_user_id(self) -> str:
        """Return the signed-in user's id or raise AuthenticationRequired."""
        session = await self.get_session()
        if session is None:
            raise AuthenticationRequired()
        return session.user_id


class TokenAuthProvider(AuthProvider):
    """Session backed by a bearer JWT, re-verified on every probe."""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    @property
    def token(self) -> Optional[str]:
        return self._token

    def sign_in(self, user_id: str, email: Optional[str] = None, expires_delta: timedelta = None) -> str:
        claims = {"sub": user_id}
        if email:
            claims["email"] = email
        self._token = create_access_token(claims, expires_delta)
        logger.info(f"Signed in: user_id={user_id}")
        return self._token

    def set_token(self, token: Optional[str]):
        self._token = token

    def sign_out(self):
        self._token = None

    async def get_session(self) -> Optional[AuthSession]:
        if not self._token:
            return None
        claims = decode_access_token(self._token)
        if not claims or not claims.get("sub"):
            return None
        return AuthSession(user_id=str(claims["sub"]), email=claims.get("email"))


def token_from_header(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an `Authorization: Bearer <token>` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
