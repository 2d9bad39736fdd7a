"""
auth/credentials.py -- Credential Store Adapter.

The single read path from the auth core into user storage. Registration
uses it for the advisory uniqueness check; the Basic auth gate and password
login use it to fetch the record whose digest is verified.

No caching: every call reflects the store's current state. Store errors are
not caught here -- a failed lookup must surface as a 500, never as a
rejected credential.

Layer rule: no imports from api/ or things/.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from auth.models import User
    from auth.store import UserStore


class CredentialStore:
    """Read-only user lookup by name, delegating to a UserStore."""

    def __init__(self, users: UserStore) -> None:
        self._users = users

    def find_by_user_name(self, user_name: str) -> User | None:
        if not user_name:
            return None
        return self._users.get_by_username(user_name)
