"""
things/dependencies.py -- Existence Gate for routes nested under a thing.

get_thing_or_404() resolves the {thing_id} path parameter through the
ThingStore on app.state. A missing thing raises NotFoundError (404
"Thing doesn't exist") and the handler never runs; a present thing is
stored on request.state.thing and returned, so the handler reuses it
instead of fetching it again.

Ordering: protected routers declare require_basic_auth as a router-level
dependency. FastAPI resolves router-level dependencies before parameter
dependencies, so an unauthenticated request is rejected with 401 before this
gate touches the store.
"""

from fastapi import Request

from core.errors import NotFoundError
from things.models import Thing

THING_NOT_FOUND = "Thing doesn't exist"


def get_thing_or_404(thing_id: int, request: Request) -> Thing:
    thing = request.app.state.thing_store.get_by_id(thing_id)
    if thing is None:
        raise NotFoundError(THING_NOT_FOUND)
    request.state.thing = thing
    return thing
