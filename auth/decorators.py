from functools import wraps

from flask import g, request

from core.errors import Unauthenticated
from .identity import get_identity_provider
from .utils import extract_bearer_token


def resolve_actor():
    """Resolve the request's bearer token into an Identity, or None when anonymous."""
    token = extract_bearer_token(request.headers.get('Authorization'))
    if token is None:
        return None
    return get_identity_provider().get_user(token)


def auth_optional(f):
    """Set ``g.actor`` to the requester's identity, or None for anonymous requests."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        g.actor = resolve_actor()
        return f(*args, **kwargs)
    return decorated_function


def auth_required(f):
    """Reject the request with 401 unless the identity provider returns a user."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        actor = resolve_actor()
        if actor is None:
            raise Unauthenticated()
        g.actor = actor
        return f(*args, **kwargs)
    return decorated_function
