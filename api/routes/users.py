"""
api/routes/users.py -- User registration and lookup.

Routes:
  POST /api/users            -- register a new user (public, rate-limited)
  GET  /api/users/{user_id}  -- public profile of a user (requires Basic auth)

Registration checks run in a fixed order and the first failure wins:
  1. required fields present: full_name, user_name, password
  2. password policy (auth.passwords.validate_password)
  3. advisory user name uniqueness via the CredentialStore
  4. bcrypt hash + insert; a UNIQUE violation at insert (two concurrent
     registrations for the same name) maps to the same 400 as step 3.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.limiter import limiter
from api.models import UserCreate, UserResponse
from auth.dependencies import get_credential_store, require_basic_auth
from auth.models import User
from auth.passwords import hash_password, validate_password
from auth.store import UserNameTaken, UserStore
from core.config import get_settings
from core.errors import ConflictError, InternalError, NotFoundError, ValidationError

logger = logging.getLogger("thingful.api")

_settings = get_settings()

_REQUIRED_FIELDS = ("full_name", "user_name", "password")

USER_NAME_TAKEN = "User name is already taken"

router = APIRouter()


@limiter.limit(_settings.registration_rate_limit)
@router.post("/users", response_model=UserResponse, status_code=201)
def register_user(request: Request, body: UserCreate) -> JSONResponse:
    """Create a user account and return its public view with a Location header."""
    for field in _REQUIRED_FIELDS:
        if not getattr(body, field):
            raise ValidationError(f"Missing '{field}' in request body")

    password_error = validate_password(body.password)
    if password_error:
        raise ValidationError(password_error)

    if get_credential_store(request).find_by_user_name(body.user_name) is not None:
        raise ConflictError(USER_NAME_TAKEN)

    user_store: UserStore = request.app.state.user_store
    new_user = User(
        user_name=body.user_name,
        full_name=body.full_name,
        nickname=body.nickname,
        password_hash=hash_password(body.password),
    )
    try:
        user_id = user_store.create_user(new_user)
    except UserNameTaken as exc:
        raise ConflictError(USER_NAME_TAKEN) from exc

    created = user_store.get_by_id(user_id)
    if created is None:
        raise InternalError()
    logger.info("Registered user id=%d", user_id)

    return JSONResponse(
        status_code=201,
        content=UserResponse.from_domain(created).model_dump(),
        headers={"Location": f"{request.url.path.rstrip('/')}/{user_id}"},
    )


@router.get("/users/{user_id}", response_model=UserResponse, dependencies=[Depends(require_basic_auth)])
def get_user(request: Request, user_id: int) -> UserResponse:
    user = request.app.state.user_store.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User doesn't exist")
    return UserResponse.from_domain(user)
