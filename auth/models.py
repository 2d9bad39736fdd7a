"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Mirrors the approach
in things/models.py -- dataclasses own domain shape; stores and routes do
the work.

Layer rule: no imports from api/ or things/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    """A registered Thingful user.

    user_name is unique and case-sensitive; the users table carries a UNIQUE
    constraint so the registration pre-check is advisory only.

    password_hash is the bcrypt digest. It never leaves the auth layer --
    serializers in api/ build responses field by field and never include it.

    id and date_created are None until the store has inserted the record.
    """

    user_name: str
    full_name: str
    password_hash: str = ""
    nickname: str | None = None
    id: int | None = None
    date_created: str | None = None  # ISO 8601, set by store on insert
