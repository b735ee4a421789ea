# pathwise/services/auth.py
"""
Credentials for PathWise accounts.

Passwords are stored as ``pbkdf2_sha256$<iterations>$<salt>$<hex digest>``.
Sessions are HS256 JWTs signed with SESSION_SECRET whose subject is the
user id; the same token travels as the session cookie or a bearer header.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import hashlib
import secrets
from jose import jwt, JWTError
from pydantic import BaseModel
from pathwise.core.config import settings

HASH_SCHEME = "pbkdf2_sha256"
ALGORITHM = "HS256"


class TokenData(BaseModel):
    sub: Optional[str] = None


def _derive(password: str, salt: str, iterations: int) -> str:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations).hex()


def hash_password(password: str) -> str:
    iterations = settings.PASSWORD_HASH_ITERATIONS
    salt = secrets.token_hex(16)
    return "$".join((HASH_SCHEME, str(iterations), salt, _derive(password, salt, iterations)))


def verify_password(plain: str, stored: str) -> bool:
    """False for a wrong password and for anything that is not one of our hashes."""
    parts = stored.split("$") if isinstance(stored, str) else []
    if len(parts) != 4 or parts[0] != HASH_SCHEME or not parts[1].isdigit():
        return False
    _, iterations, salt, digest = parts
    return secrets.compare_digest(_derive(plain, salt, int(iterations)), digest)


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    exp = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    return jwt.encode({"sub": str(user_id), "iat": now, "exp": exp}, settings.SESSION_SECRET, algorithm=ALGORITHM)


def decode_access_token(token: str) -> TokenData:
    """Raises JWTError on a bad signature or an expired token."""
    payload = jwt.decode(token, settings.SESSION_SECRET, algorithms=[ALGORITHM])
    return TokenData(sub=payload.get("sub"))


__all__ = ["TokenData", "JWTError", "hash_password", "verify_password", "create_access_token", "decode_access_token"]
