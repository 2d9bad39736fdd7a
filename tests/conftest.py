"""
tests/conftest.py -- Shared test fixtures for Thingful integration tests.

This module provides:
  - _make_test_stores(): isolated in-memory DB shared by UserStore + ThingStore
  - _patch_lifespan(): wires test stores into app.state, bypassing real startup
  - client: TestClient against the real app with the patched lifespan
  - seeded: client + stores pre-loaded with users, things and reviews
  - auth_header: builds "Basic base64(user_name:password)" header values

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs sync route handlers and dependencies in a thread
pool. Plain :memory: DBs are per-connection and would present a blank schema
to each worker thread. Each test gets its own uniquely named database.

Environment must be set before any app import:
  DEBUG=true               -> get_settings() auto-generates SECRET_KEY
  RATE_LIMIT_ENABLED=false -> every request comes from the same test client
  ALLOWED_HOSTS            -> TestClient sends Host: testserver
"""

from __future__ import annotations

import base64
import os
import uuid
from collections.abc import Generator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

# CRITICAL: Set before any auth/core import so get_settings() sees them.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("ALLOWED_HOSTS", '["testserver", "localhost"]')

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.models import User
from auth.passwords import hash_password
from auth.store import UserStore
from things.models import Review, Thing
from things.store import ThingStore

# ---------------------------------------------------------------------------
# Fixture data
# ---------------------------------------------------------------------------

# (user_name, full_name, nickname, plaintext password)
TEST_USERS = [
    ("test-user-1", "Test user 1", "TU1", "Passw0rd!1"),
    ("test-user-2", "Test user 2", "TU2", "Passw0rd!2"),
    ("test-user-3", "Test user 3", None, "Passw0rd!3"),
]

# bcrypt at cost 12 is deliberately slow; hash each fixture password once.
_HASHES = {name: hash_password(password) for name, _, _, password in TEST_USERS}


@dataclass
class Seeded:
    """Handles to a seeded test app: client, stores, and the ids inserted."""

    client: TestClient
    user_store: UserStore
    thing_store: ThingStore
    users: list[User] = field(default_factory=list)
    passwords: dict[str, str] = field(default_factory=dict)
    thing_ids: list[int] = field(default_factory=list)
    review_ids: list[int] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------


def _make_test_stores() -> tuple[UserStore, ThingStore]:
    """Create a uniquely named shared-memory SQLite DB and both stores on it."""
    url = f"sqlite:///file:test_thingful_{uuid.uuid4().hex}?mode=memory&cache=shared&uri=true"
    return UserStore(url), ThingStore(url)


def _patch_lifespan(user_store: UserStore, thing_store: ThingStore):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = user_store
        app.state.thing_store = thing_store
        yield

    return test_lifespan


def _seed_users(user_store: UserStore) -> list[User]:
    users = []
    for user_name, full_name, nickname, _ in TEST_USERS:
        user_id = user_store.create_user(
            User(user_name=user_name, full_name=full_name, nickname=nickname, password_hash=_HASHES[user_name])
        )
        users.append(user_store.get_by_id(user_id))
    return users


def _seed_things(thing_store: ThingStore, users: list[User]) -> tuple[list[int], list[int]]:
    thing_ids = [
        thing_store.create_thing(
            Thing(
                title=f"Thing {n}",
                content=f"Content of thing {n}",
                image=f"https://loremflickr.com/750/300/landscape?random={n}",
                user_id=users[n - 1].id,
            )
        )
        for n in (1, 2, 3)
    ]
    reviews = [
        (thing_ids[0], users[1], 2, "Too bright."),
        (thing_ids[0], users[2], 3, "Fine, I guess."),
        (thing_ids[0], users[0], 5, "My own thing, obviously perfect."),
        (thing_ids[1], users[0], 4, "Sturdy."),
    ]
    review_ids = [
        thing_store.create_review(Review(text=text, rating=rating, thing_id=thing_id, user_id=author.id))
        for thing_id, author, rating, text in reviews
    ]
    return thing_ids, review_ids


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def stores() -> Generator[tuple[UserStore, ThingStore], None, None]:
    user_store, thing_store = _make_test_stores()
    yield user_store, thing_store
    thing_store.close()
    user_store.close()


@pytest.fixture
def client(stores) -> Generator[TestClient, None, None]:
    """TestClient on the real app with empty isolated stores."""
    app.router.lifespan_context = _patch_lifespan(*stores)
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


@pytest.fixture
def seeded(client, stores) -> Seeded:
    """Client plus three users, three things (one without reviews) and four reviews."""
    user_store, thing_store = stores
    users = _seed_users(user_store)
    thing_ids, review_ids = _seed_things(thing_store, users)
    return Seeded(
        client=client,
        user_store=user_store,
        thing_store=thing_store,
        users=users,
        passwords={name: password for name, _, _, password in TEST_USERS},
        thing_ids=thing_ids,
        review_ids=review_ids,
    )


@pytest.fixture
def auth_header():
    """Return a builder for Basic Authorization header values."""

    def _make(user_name: str, password: str) -> str:
        token = base64.b64encode(f"{user_name}:{password}".encode("utf-8")).decode("ascii")
        return f"Basic {token}"

    return _make
