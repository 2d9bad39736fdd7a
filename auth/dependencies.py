"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

require_basic_auth() is the Authentication Gate for protected routes. It
feeds the Authorization header through auth.gate.authenticate_basic() and
either:
  - attaches the principal to request.state.user and returns it, or
  - raises AuthenticationError, which api/main.py renders as
    401 {"error": "<reason>"} before any handler code runs.

It is a plain def, so FastAPI runs it in the threadpool: the bcrypt check
and the store lookup suspend this request only, never the event loop.

Layer rule: no imports from api/ or things/.
  auth/dependencies.py may import from fastapi (for Request) because this
  module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

import logging

from fastapi import Request

from auth.credentials import CredentialStore
from auth.gate import Rejected, authenticate_basic
from auth.models import User
from core.errors import AuthenticationError

logger = logging.getLogger("thingful.auth")


def get_credential_store(request: Request) -> CredentialStore:
    """Build the credential adapter over the app's UserStore."""
    return CredentialStore(request.app.state.user_store)


def require_basic_auth(request: Request) -> User:
    """Require valid Basic credentials. Raises AuthenticationError (401) otherwise.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(user: User = Depends(require_basic_auth)): ...
    """
    outcome = authenticate_basic(request.headers.get("Authorization"), get_credential_store(request))
    if isinstance(outcome, Rejected):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, outcome.reason)
        raise AuthenticationError(outcome.reason)
    request.state.user = outcome.principal
    return outcome.principal
