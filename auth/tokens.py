"""
auth/tokens.py -- JWT issuing and password login.

Security design decisions:
  JWT: python-jose with HS256. Tokens are signed with SECRET_KEY and carry
       the user name as the subject, user_id, and expiry. Verification
       returns None on any failure -- the caller decides what that means.
       No route here accepts bearer tokens; decode_access_token() is for
       token consumers (clients and services) that verify an authToken.

  authenticate_user() always runs bcrypt, against DUMMY_HASH when the user
       does not exist, so login response time does not reveal whether a user
       name is registered.

Layer rule: no imports from api/ or things/. Import from core/ is allowed.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from jose import JWTError, jwt

from auth.passwords import DUMMY_HASH, verify_password
from core.config import get_settings

if TYPE_CHECKING:
    from auth.credentials import CredentialStore
    from auth.models import User

_settings = get_settings()

ALGORITHM = "HS256"


def create_access_token(user_id: int, user_name: str, expire_seconds: int = 0) -> str:
    """Encode a signed JWT for the given user.

    Args:
        user_id:        Numeric user ID stored in the DB.
        user_name:      Stored as the JWT subject claim.
        expire_seconds: Token lifetime. 0 (default) uses
                        Settings.token_expire_seconds.
    """
    duration = expire_seconds if expire_seconds > 0 else _settings.token_expire_seconds
    expire = datetime.now(timezone.utc) + timedelta(seconds=duration)
    payload = {
        "sub": user_name,
        "user_id": user_id,
        "exp": expire,
    }
    return jwt.encode(payload, _settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict | None:
    """Decode and verify a JWT. Returns the payload dict or None on any failure."""
    try:
        payload = jwt.decode(token, _settings.secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if "user_id" not in payload or "sub" not in payload:
        return None
    return payload


def authenticate_user(credentials: CredentialStore, user_name: str, password: str) -> User | None:
    """Check a user name / password pair with timing equalization.

    Returns the User on success, None on any failure. Unknown user and wrong
    password are indistinguishable to the caller.
    """
    user = credentials.find_by_user_name(user_name)
    if user is None:
        verify_password(password, DUMMY_HASH)
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user
