"""
api/routes/things.py -- Thing catalogue and review routes.

Routes:
  GET /api/things                      -- list all things (public)
  GET /api/things/{thing_id}           -- one thing (Basic auth, then existence)
  GET /api/things/{thing_id}/reviews   -- reviews of a thing (Basic auth, then existence)

Gate order on the protected routes is fixed by construction:
require_basic_auth is a router-level dependency of protected_router, and
FastAPI resolves router-level dependencies before the handler's own
Depends(get_thing_or_404). A request must therefore be authenticated before
the store is asked whether the thing exists, and both gates pass before the
handler body runs.
"""

from fastapi import APIRouter, Depends, Request

from api.models import ReviewResponse, ThingResponse
from auth.dependencies import require_basic_auth
from auth.models import User
from auth.store import UserStore
from things.dependencies import get_thing_or_404
from things.models import Thing
from things.store import ThingStore

router = APIRouter()
protected_router = APIRouter(dependencies=[Depends(require_basic_auth)])


def _authors(user_store: UserStore, user_ids: set[int]) -> dict[int, User]:
    """Resolve author ids to users, skipping ids that no longer resolve."""
    authors: dict[int, User] = {}
    for user_id in user_ids:
        user = user_store.get_by_id(user_id)
        if user is not None:
            authors[user_id] = user
    return authors


@router.get("/things", response_model=list[ThingResponse])
def list_things(request: Request) -> list[ThingResponse]:
    thing_store: ThingStore = request.app.state.thing_store
    things = thing_store.list_things()
    authors = _authors(request.app.state.user_store, {t.user_id for t in things})
    return [ThingResponse.from_domain(t, authors.get(t.user_id)) for t in things]


@protected_router.get("/things/{thing_id}", response_model=ThingResponse)
def get_thing(request: Request, thing: Thing = Depends(get_thing_or_404)) -> ThingResponse:
    """Return the thing resolved by the existence gate."""
    author = request.app.state.user_store.get_by_id(thing.user_id)
    return ThingResponse.from_domain(thing, author)


@protected_router.get("/things/{thing_id}/reviews", response_model=list[ReviewResponse])
def list_reviews(request: Request, thing: Thing = Depends(get_thing_or_404)) -> list[ReviewResponse]:
    """Return every review of the thing, oldest first."""
    thing_store: ThingStore = request.app.state.thing_store
    reviews = thing_store.list_reviews_for_thing(thing.id)
    authors = _authors(request.app.state.user_store, {r.user_id for r in reviews})
    return [ReviewResponse.from_domain(r, authors.get(r.user_id)) for r in reviews]
