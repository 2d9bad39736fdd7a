"""
api/routes/auth.py -- Password login issuing JWT bearer tokens.

Routes:
  POST /api/auth/login  -- exchange user_name + password for {"authToken": ...}

Security:
  Rate-limited per client address (LOGIN_RATE_LIMIT).
  authenticate_user() provides timing equalization -- use it, never inline
  get_by_username() + verify_password().
  Unknown user and wrong password return the identical 400 body.
  Cache-Control: no-store on every response from this endpoint.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.limiter import limiter
from api.models import ErrorResponse, LoginRequest, LoginResponse
from auth.dependencies import get_credential_store
from auth.tokens import authenticate_user, create_access_token
from core.config import get_settings
from core.errors import ValidationError

logger = logging.getLogger("thingful.auth")

_settings = get_settings()

BAD_CREDENTIALS = "Incorrect user_name or password"

router = APIRouter()


@limiter.limit(_settings.login_rate_limit)
@router.post("/auth/login", response_model=LoginResponse)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with user name and password; return a signed JWT."""
    for field in ("user_name", "password"):
        if not getattr(body, field):
            raise ValidationError(f"Missing {field} in request body")

    user = authenticate_user(get_credential_store(request), body.user_name, body.password)
    if user is None:
        logger.info("Failed login attempt")
        resp = JSONResponse(status_code=400, content=ErrorResponse(error=BAD_CREDENTIALS).model_dump())
        resp.headers["Cache-Control"] = "no-store"
        return resp

    token = create_access_token(user.id, user.user_name)
    resp = JSONResponse(status_code=200, content=LoginResponse(authToken=token).model_dump())
    resp.headers["Cache-Control"] = "no-store"
    return resp
