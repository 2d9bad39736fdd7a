"""
auth/passwords.py -- Password policy and bcrypt hashing.

Policy:
  validate_password() is a pure function returning None (acceptable) or the
  first failing rule's message. Rules are evaluated in a fixed order and the
  first failure wins: length floor, length ceiling, edge spaces, character
  diversity. The 72-character ceiling matches bcrypt's input limit, so an
  accepted password is never silently truncated by the hasher.

Hashing:
  bcrypt directly (no passlib wrapper). gensalt() produces a fresh salt per
  call and the cost factor (BCRYPT_ROUNDS, default 12) is embedded in the
  digest, so verify_password() needs nothing but the digest itself.
  bcrypt.checkpw compares in constant time.

  DUMMY_HASH is computed once at import. Callers that look up a user and
  find nothing must still run verify_password() against it, so the response
  time for an unknown user matches the one for a wrong password.

Layer rule: no imports from api/ or things/. Import from core/ is allowed.
"""

from __future__ import annotations

import re

import bcrypt

from core.config import get_settings

_settings = get_settings()

MIN_LENGTH = 8
MAX_LENGTH = 72

SPECIAL_CHARACTERS = "!@#$%^&"

TOO_SHORT = f"Password must be at least {MIN_LENGTH} characters long"
TOO_LONG = f"Password must be less than {MAX_LENGTH + 1} characters long"
EDGE_SPACES = "Password must not start or end with spaces"
NOT_DIVERSE = "Password must contain 1 upper case letter, 1 number, and 1 special character"

_CHARACTER_CLASSES = (
    re.compile(r"[a-z]"),
    re.compile(r"[A-Z]"),
    re.compile(r"[0-9]"),
    re.compile(f"[{re.escape(SPECIAL_CHARACTERS)}]"),
)

# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------


def validate_password(password: str) -> str | None:
    """Return None if the password satisfies the policy, else the rejection reason."""
    if len(password) < MIN_LENGTH:
        return TOO_SHORT
    if len(password) > MAX_LENGTH:
        return TOO_LONG
    if password.startswith(" ") or password.endswith(" "):
        return EDGE_SPACES
    if not all(pattern.search(password) for pattern in _CHARACTER_CLASSES):
        return NOT_DIVERSE
    return None


# ---------------------------------------------------------------------------
# Hashing
# ---------------------------------------------------------------------------


def _encode(plain: str) -> bytes:
    # The policy counts characters; bcrypt counts bytes and rejects > 72.
    return plain.encode("utf-8")[:MAX_LENGTH]


def hash_password(plain: str) -> str:
    """Return a bcrypt digest of the plaintext password."""
    salt = bcrypt.gensalt(rounds=_settings.bcrypt_rounds)
    return bcrypt.hashpw(_encode(plain), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt digest.

    A malformed digest (or non-string input) is a mismatch, not an error.
    """
    try:
        return bcrypt.checkpw(_encode(plain), hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


DUMMY_HASH: str = hash_password("thingful_timing_dummy")
