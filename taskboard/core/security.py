import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable

from fastapi import Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from taskboard.core.errors import AuthError, InvalidToken

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
# auto_error is off so a missing header becomes our own 401 body.
auth_scheme = HTTPBearer(auto_error=False)

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


RevocationCheck = Callable[[dict], bool]


class TokenIssuer:
    """Issues and verifies signed session tokens.

    Tokens carry ``sub`` (user id), ``email``, ``name`` and a ``jti``. They
    only expire when ``expire_minutes`` is set. ``revocation_check`` receives
    the decoded payload and returns True for tokens that must be rejected.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int | None = None,
        revocation_check: RevocationCheck | None = None,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self.revocation_check = revocation_check

    def issue(self, user_id: str, email: str, name: str) -> str:
        to_encode = {
            "sub": user_id,
            "email": email,
            "name": name,
            "jti": uuid.uuid4().hex,
        }
        if self.expire_minutes is not None:
            expire = datetime.now(timezone.utc) + timedelta(minutes=self.expire_minutes)
            to_encode["exp"] = expire
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def decode(self, token: str | None) -> dict:
        if not token:
            raise AuthError("Access token required")
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            raise InvalidToken()
        if not payload.get("sub"):
            raise InvalidToken()
        if self.revocation_check is not None and self.revocation_check(payload):
            raise InvalidToken("Token revoked")
        return payload


def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Security(auth_scheme),
) -> dict:
    token = credentials.credentials if credentials else None
    return request.app.state.context.tokens.decode(token)
