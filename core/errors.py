"""
core/errors.py -- Error taxonomy shared by the auth gates, stores and routes.

Every user-visible failure is one of these classes. api/main.py registers a
single exception handler for ThingfulError that renders
{"error": exc.message} with exc.status_code, so gates and handlers only ever
raise -- they never build error responses themselves.

Anything that is NOT a ThingfulError (SQLAlchemy connection failures,
unexpected constraint violations, bugs) falls through to the catch-all
handler and becomes an opaque 500. Store failures must never be converted
into a 401 or 404 here.

Layer rule: core/ is the kernel. No imports from api/, auth/, or things/.
"""

from __future__ import annotations


class ThingfulError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ThingfulError):
    """Request body failed a field or password-policy check (400)."""

    status_code = 400


class ConflictError(ThingfulError):
    """Write would violate a uniqueness rule, e.g. a taken user name (400)."""

    status_code = 400


class AuthenticationError(ThingfulError):
    """Credential check failed (401).

    The message is always one of the generic gate reasons and never says
    which half of the credential pair was wrong.
    """

    status_code = 401


class NotFoundError(ThingfulError):
    """A referenced resource does not exist (404)."""

    status_code = 404


class InternalError(ThingfulError):
    status_code = 500

    def __init__(self, message: str = "An unexpected error occurred.") -> None:
        super().__init__(message)
