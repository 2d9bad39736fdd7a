"""
auth/store.py -- SQLAlchemy Core persistence layer for users.

Pattern: Repository + Data Mapper (same as things/store.py).
UserStore is the repository; _row_to_user is the mapper. Route and
dependency code never touches SQL directly.

Security:
  All queries use bound parameters. No f-strings in SQL.

  UNIQUE(user_name) is declared on the table. It is the authoritative
  guard against duplicate registrations: two concurrent POST /users can both
  pass the advisory get_by_username() pre-check, but only one INSERT wins.
  The loser gets sqlalchemy.exc.IntegrityError, which create_user()
  re-raises as UserNameTaken.

DB path: settings.database_url (things/store.py shares the same database so
thing authors can be resolved with get_by_id()).

Layer rule: no imports from api/ or things/.
"""

from __future__ import annotations

import logging

from sqlalchemy import Column, Integer, MetaData, String, Table, Text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from auth.models import User
from core.db import make_engine, now_iso

logger = logging.getLogger("thingful.auth")

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_users = Table(
    "thingful_users",
    _metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_name", String(255), nullable=False, unique=True),
    Column("full_name", String(255), nullable=False),
    Column("nickname", String(255)),
    Column("password", Text, nullable=False),  # bcrypt digest, never plaintext
    Column("date_created", String(32), nullable=False),
)


class UserNameTaken(Exception):
    """Raised by create_user() when the UNIQUE(user_name) constraint fires."""


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class UserStore:
    """Repository for User entities.

    Usage:
        store = UserStore("sqlite:///thingful.db")
        user_id = store.create_user(User(user_name="dunder", full_name="Dunder Mifflin",
                                         password_hash=hash_password("secret")))
        user = store.get_by_username("dunder")
        store.close()
    """

    def __init__(self, db_url: str) -> None:
        self.engine: Engine = make_engine(db_url)
        _metadata.create_all(self.engine)

    def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        with self.engine.connect() as conn:
            conn.execute(_users.select().limit(1))
        return True

    def create_user(self, user: User) -> int:
        """Insert a new user and return its assigned database ID.

        date_created is stamped here, at insert time, never taken from the
        caller. Raises UserNameTaken if the user name already exists.
        """
        try:
            with self.engine.connect() as conn:
                result = conn.execute(
                    _users.insert().values(
                        user_name=user.user_name,
                        full_name=user.full_name,
                        nickname=user.nickname,
                        password=user.password_hash,
                        date_created=now_iso(),
                    )
                )
                conn.commit()
                return result.inserted_primary_key[0]
        except IntegrityError as exc:
            logger.info("Rejected duplicate user name at insert")
            raise UserNameTaken(user.user_name) from exc

    def get_by_username(self, user_name: str) -> User | None:
        """Look up a user by exact user name (case-sensitive). Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(_users.c.user_name == user_name)).fetchone()
        return _row_to_user(row) if row is not None else None

    def get_by_id(self, user_id: int) -> User | None:
        """Look up a user by primary key. Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(_users.c.id == user_id)).fetchone()
        return _row_to_user(row) if row is not None else None

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mapper (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_user(row) -> User:
    return User(
        id=row.id,
        user_name=row.user_name,
        full_name=row.full_name,
        nickname=row.nickname,
        password_hash=row.password,
        date_created=row.date_created,
    )
