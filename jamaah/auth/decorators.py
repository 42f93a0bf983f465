"""Decorators for the auth blueprint."""

from functools import wraps

from flask import g, request

from jamaah.errors import ForbiddenError, UnauthorizedError
from jamaah.extensions import backend

ADMIN_ROLE = "Admin"


def load_identity():
    """Resolve the bearer token of the current request into ``g.user``."""
    g.user = backend.identity.verify(request.headers.get("Authorization"))
    return g.user


def login_required(f=None, admin_required=False):
    """Reject the request with 401 unless it carries a valid bearer token.

    Usage:
    @login_required
    def protected_view():
        ...

    @login_required(admin_required=True)
    def admin_view():
        ...
    """

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            if load_identity() is None:
                raise UnauthorizedError()
            if admin_required and g.user.get("role") != ADMIN_ROLE:
                raise ForbiddenError("Hanya admin yang dapat melakukan aksi ini")
            return func(*args, **kwargs)

        return decorated_function

    if f:
        return decorator(f)
    return decorator


def login_optional(f):
    """Load ``g.user`` when a valid token is present, without requiring one."""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        load_identity()
        return f(*args, **kwargs)

    return decorated_function
