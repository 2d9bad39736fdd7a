"""
auth/gate.py -- Basic credential verification as an explicit pipeline.

authenticate_basic() walks one request's credential material through a
fixed sequence and returns a tagged outcome:

    header --parse--> (user_name, password) --lookup+bcrypt--> Verified(user)
       |                      |                        |
       v                      v                        v
  Rejected(MISSING_TOKEN)  Rejected(UNAUTHORIZED)  Rejected(UNAUTHORIZED)

Every failure after a successful parse collapses to the same UNAUTHORIZED
reason. Empty user name, unknown user and wrong password produce equal
Rejected values, and authenticate_user() runs bcrypt in each case, so
neither the response body nor its timing says which half of the pair was
wrong.

The pipeline is framework-free. auth/dependencies.py adapts it to FastAPI.

Layer rule: no imports from api/ or things/.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from auth.passwords import DUMMY_HASH, verify_password
from auth.tokens import authenticate_user

if TYPE_CHECKING:
    from auth.credentials import CredentialStore
    from auth.models import User

MISSING_TOKEN = "Missing basic token"
UNAUTHORIZED = "Unauthorized request"

_SCHEME = "basic "


@dataclass(frozen=True)
class Verified:
    principal: User


@dataclass(frozen=True)
class Rejected:
    reason: str


AuthOutcome = Union[Verified, Rejected]


def parse_basic_header(header: str | None) -> tuple[str, str] | None:
    """Decode "Basic base64(user_name:password)" into its two halves.

    Returns None when the header is absent, uses another scheme, or is not
    valid base64 / UTF-8. The value is split at the first colon, so
    passwords may themselves contain colons.
    """
    if not header or not header.lower().startswith(_SCHEME):
        return None
    token = header[len(_SCHEME):].strip()
    try:
        decoded = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    user_name, _, password = decoded.partition(":")
    return user_name, password


def authenticate_basic(header: str | None, credentials: CredentialStore) -> AuthOutcome:
    """Run the full credential check for one request."""
    pair = parse_basic_header(header)
    if pair is None:
        return Rejected(MISSING_TOKEN)

    user_name, password = pair
    if not user_name or not password:
        verify_password(password, DUMMY_HASH)
        return Rejected(UNAUTHORIZED)

    user = authenticate_user(credentials, user_name, password)
    if user is None:
        return Rejected(UNAUTHORIZED)
    return Verified(user)
