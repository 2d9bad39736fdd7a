"""
API request and response models for Thingful REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py and
things/models.py, which own the internal domain representation. Route
handlers map between the two through the from_domain() factories below.

Every free-text field is passed through core.presentation.sanitize() inside
those factories, so no route can forget to sanitize. No response model has a
password field.

Request models mark required fields Optional on purpose: the registration
and login handlers check presence themselves, in a fixed order, so the
client gets "Missing '<field>' in request body" instead of a generic 422.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from auth.models import User
from core.presentation import sanitize
from things.models import Review, Thing

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class UserCreate(BaseModel):
    """Request body for POST /api/users."""

    user_name: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, max_length=1024)
    full_name: Optional[str] = Field(default=None, max_length=255)
    nickname: Optional[str] = Field(default=None, max_length=255)


class LoginRequest(BaseModel):
    """Request body for POST /api/auth/login."""

    user_name: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, max_length=1024)


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class UserResponse(BaseModel):
    """Public view of a user. Never carries the password digest."""

    model_config = ConfigDict(frozen=True)

    id: int
    user_name: str
    full_name: str
    nickname: str
    date_created: str

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            user_name=sanitize(user.user_name),
            full_name=sanitize(user.full_name),
            nickname=sanitize(user.nickname),
            date_created=user.date_created or "",
        )


class LoginResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    authToken: str  # noqa: N815 -- wire name used by existing clients


class ThingResponse(BaseModel):
    """A thing with its author and review aggregates."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    content: str
    image: Optional[str]
    date_created: str
    number_of_reviews: int
    average_review_rating: Optional[float]
    user: Optional[UserResponse]

    @classmethod
    def from_domain(cls, thing: Thing, author: Optional[User]) -> "ThingResponse":
        return cls(
            id=thing.id,
            title=sanitize(thing.title),
            content=sanitize(thing.content),
            image=thing.image,
            date_created=thing.date_created,
            number_of_reviews=thing.number_of_reviews,
            average_review_rating=thing.average_review_rating,
            user=UserResponse.from_domain(author) if author is not None else None,
        )


class ReviewResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    rating: int
    text: str
    thing_id: int
    date_created: str
    user: Optional[UserResponse]

    @classmethod
    def from_domain(cls, review: Review, author: Optional[User]) -> "ReviewResponse":
        return cls(
            id=review.id,
            rating=review.rating,
            text=sanitize(review.text),
            thing_id=review.thing_id,
            date_created=review.date_created,
            user=UserResponse.from_domain(author) if author is not None else None,
        )


class ErrorResponse(BaseModel):
    """Envelope for every 4xx/5xx response: a single error string."""

    model_config = ConfigDict(frozen=True)

    error: str


class HealthResponse(BaseModel):
    """Response for GET /api/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str] = Field(default_factory=dict)
