"""
things/models.py -- Domain dataclasses for things and their reviews.

These are pure data containers with zero logic. Aggregates (review count,
average rating) are computed by things/store.py at read time and carried on
Thing so the route layer can serialize without a second query.

Separation of concerns: these dataclasses are the catalogue's domain truth,
just as auth/models.py is the auth layer's. Neither imports the other --
authors are referenced by user_id only.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Thing:
    """A reviewable item.

    id is None before the record is written to the database.
    """

    title: str
    user_id: int
    content: str = ""
    image: Optional[str] = None
    id: Optional[int] = None
    date_created: str = ""  # ISO 8601, set by store on insert
    number_of_reviews: int = 0
    average_review_rating: Optional[float] = None


@dataclass
class Review:
    """A user's rating (1-5) and comment on a thing."""

    text: str
    rating: int
    thing_id: int
    user_id: int
    id: Optional[int] = None
    date_created: str = ""  # ISO 8601, set by store on insert
