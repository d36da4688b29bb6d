"""
Request authentication gate.

authenticate_request() runs before every request (registered in create_app). It turns a
valid ``Authorization: Bearer <token>`` header into a Principal on ``g.principal`` and
otherwise leaves the request anonymous; it never rejects anything itself. Views that need
an identity are wrapped in login_required(), which is where anonymous requests get a 401.
"""
from __future__ import annotations

import logging
from functools import wraps

from flask import current_app, g, request

from services.auth_service import get_auth_gateway
from utils.exceptions import TokenInvalid, Unauthorized

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def bearer_token() -> str | None:
    auth = request.headers.get("Authorization", "")
    if not auth.startswith(BEARER_PREFIX):
        return None
    return auth[len(BEARER_PREFIX):].strip() or None


def is_public_endpoint(endpoint: str | None) -> bool:
    if endpoint is None:
        return True
    public = current_app.config.get("PUBLIC_ENDPOINTS", ())
    prefixes = current_app.config.get("PUBLIC_ENDPOINT_PREFIXES", ())
    return endpoint in public or endpoint.startswith(tuple(prefixes))


def authenticate_request():
    g.principal = None
    if is_public_endpoint(request.endpoint):
        return None

    token = bearer_token()
    if token is None:
        return None
    try:
        g.principal = get_auth_gateway().resolve_principal(token)
    except TokenInvalid as exc:
        logger.debug("Bearer token rejected on %s %s: %s", request.method, request.path, exc.message)
    return None


def login_required():
    """Require an authenticated principal; hands it to the view as ``principal``."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            principal = getattr(g, "principal", None)
            if principal is None:
                raise Unauthorized()
            return fn(*args, principal=principal, **kwargs)

        return wrapper

    return decorator
