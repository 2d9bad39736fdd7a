"""
things/store.py -- SQLAlchemy-backed persistence layer for things and reviews.

Uses SQLAlchemy Core (not ORM) so the dataclasses in things/models.py remain
the authoritative domain representation. Swapping SQLite for PostgreSQL is a
connection string change, not a rewrite.

Pattern: Repository + Data Mapper. ThingStore is the repository; the
_row_to_* functions are the mappers. Route handlers never touch SQL directly.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = ThingStore("sqlite:///thingful.db")
    thing_id = store.create_thing(Thing(title="Lamp", user_id=1))
    store.create_review(Review(text="Bright", rating=5, thing_id=thing_id, user_id=2))
    thing = store.get_by_id(thing_id)      # carries number_of_reviews / average_review_rating
    reviews = store.list_reviews_for_thing(thing_id)
    store.close()
"""

from typing import Optional

from sqlalchemy import CheckConstraint, Column, Integer, MetaData, String, Table, Text, func, select
from sqlalchemy.engine import Engine

from core.db import make_engine, now_iso
from things.models import Review, Thing

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_things = Table(
    "thingful_things",
    _metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(255), nullable=False),
    Column("content", Text, nullable=False, server_default=""),
    Column("image", Text),
    Column("user_id", Integer, nullable=False),  # thingful_users.id
    Column("date_created", String(32), nullable=False),
)

_reviews = Table(
    "thingful_reviews",
    _metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("text", Text, nullable=False),
    Column("rating", Integer, nullable=False),
    Column("thing_id", Integer, nullable=False, index=True),  # thingful_things.id
    Column("user_id", Integer, nullable=False),  # thingful_users.id
    Column("date_created", String(32), nullable=False),
    CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating"),
)


def _things_with_stats():
    """SELECT things LEFT JOIN per-thing review aggregates."""
    stats = (
        select(
            _reviews.c.thing_id,
            func.count(_reviews.c.id).label("number_of_reviews"),
            func.avg(_reviews.c.rating).label("average_review_rating"),
        )
        .group_by(_reviews.c.thing_id)
        .subquery()
    )
    return select(
        _things,
        stats.c.number_of_reviews,
        stats.c.average_review_rating,
    ).select_from(_things.outerjoin(stats, stats.c.thing_id == _things.c.id))


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class ThingStore:
    """Repository for Thing and Review entities.

    Shares its database with auth.store.UserStore; user_id columns refer to
    thingful_users.id and are resolved by the route layer.
    """

    def __init__(self, db_url: str) -> None:
        self.engine: Engine = make_engine(db_url)
        _metadata.create_all(self.engine)

    # ------------------------------------------------------------------
    # Things
    # ------------------------------------------------------------------

    def create_thing(self, thing: Thing) -> int:
        """Insert a thing and return its assigned ID."""
        with self.engine.connect() as conn:
            result = conn.execute(
                _things.insert().values(
                    title=thing.title,
                    content=thing.content,
                    image=thing.image,
                    user_id=thing.user_id,
                    date_created=thing.date_created or now_iso(),
                )
            )
            conn.commit()
            return result.inserted_primary_key[0]

    def get_by_id(self, thing_id: int) -> Optional[Thing]:
        """Return the thing with its review aggregates, or None if it does not exist."""
        with self.engine.connect() as conn:
            row = conn.execute(_things_with_stats().where(_things.c.id == thing_id)).fetchone()
        return _row_to_thing(row) if row is not None else None

    def list_things(self) -> list[Thing]:
        """Return every thing, oldest first."""
        with self.engine.connect() as conn:
            rows = conn.execute(_things_with_stats().order_by(_things.c.id)).fetchall()
        return [_row_to_thing(r) for r in rows]

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------

    def create_review(self, review: Review) -> int:
        """Insert a review and return its assigned ID.

        Raises sqlalchemy.exc.IntegrityError if rating is outside 1-5.
        """
        with self.engine.connect() as conn:
            result = conn.execute(
                _reviews.insert().values(
                    text=review.text,
                    rating=review.rating,
                    thing_id=review.thing_id,
                    user_id=review.user_id,
                    date_created=review.date_created or now_iso(),
                )
            )
            conn.commit()
            return result.inserted_primary_key[0]

    def list_reviews_for_thing(self, thing_id: int) -> list[Review]:
        """Return all reviews of a thing, oldest first. Empty list if none."""
        with self.engine.connect() as conn:
            rows = conn.execute(
                _reviews.select().where(_reviews.c.thing_id == thing_id).order_by(_reviews.c.id)
            ).fetchall()
        return [_row_to_review(r) for r in rows]

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mappers (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_thing(row) -> Thing:
    average = row.average_review_rating
    return Thing(
        id=row.id,
        title=row.title,
        content=row.content,
        image=row.image,
        user_id=row.user_id,
        date_created=row.date_created,
        number_of_reviews=row.number_of_reviews or 0,
        average_review_rating=float(average) if average is not None else None,
    )


def _row_to_review(row) -> Review:
    return Review(
        id=row.id,
        text=row.text,
        rating=row.rating,
        thing_id=row.thing_id,
        user_id=row.user_id,
        date_created=row.date_created,
    )
