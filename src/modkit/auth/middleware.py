"""Authorization tiers as router middlewares.

:func:`load_auth` runs before every request and resolves the bearer
token into ``g.auth``.  :func:`require_auth` and
:func:`require_superuser_auth` build the middlewares that guard the
authenticated and admin route tiers.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Any

from flask import current_app, g, request

from modkit.app.errors import FORBIDDEN, UNAUTHORIZED, ApiProblem
from modkit.auth.tokens import AuthIdentity, decode_token
from modkit.routing import Middleware

if TYPE_CHECKING:
    from collections.abc import Callable

log = logging.getLogger(__name__)

REQUIRE_AUTH_MIDDLEWARE_ID = "requireAuth"
REQUIRE_SUPERUSER_AUTH_MIDDLEWARE_ID = "requireSuperuserAuth"


def load_auth() -> AuthIdentity | None:
    """Resolve the ``Authorization: Bearer`` header into ``g.auth``.

    Missing, malformed or invalid tokens leave the request anonymous
    (``g.auth is None``); the route tier decides whether that is
    acceptable.
    """
    g.auth = None
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None

    settings = current_app.config["MODKIT_SETTINGS"].auth
    payload = decode_token(
        auth_header[7:],
        settings.token_secret,
        settings.token_expiry_seconds,
    )
    if payload is None:
        return None

    collection = str(payload["collection"])
    g.auth = AuthIdentity(
        id=str(payload["id"]),
        collection=collection,
        is_superuser=collection == settings.superuser_collection,
    )
    return g.auth


def _current_auth() -> AuthIdentity:
    auth = getattr(g, "auth", None)
    if auth is None:
        raise ApiProblem(
            UNAUTHORIZED,
            "The request requires valid record authorization token.",
            status=401,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth


def require_auth(*collections: str) -> Middleware:
    """Middleware requiring an authenticated request.

    When *collections* are given the authenticated identity must belong
    to one of them.
    """

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            auth = _current_auth()
            if collections and auth.collection not in collections:
                raise ApiProblem(
                    FORBIDDEN,
                    "The authorized record is not allowed to perform this action.",
                    status=403,
                )
            return fn(*args, **kwargs)

        return wrapper

    return Middleware(func=decorator, id=REQUIRE_AUTH_MIDDLEWARE_ID)


def require_superuser_auth() -> Middleware:
    """Middleware requiring a superuser-authenticated request."""

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            auth = _current_auth()
            if not auth.is_superuser:
                log.warning(
                    "Superuser route denied for %s/%s",
                    auth.collection,
                    auth.id,
                )
                raise ApiProblem(
                    FORBIDDEN,
                    "The request requires superuser authorization token.",
                    status=403,
                )
            return fn(*args, **kwargs)

        return wrapper

    return Middleware(func=decorator, id=REQUIRE_SUPERUSER_AUTH_MIDDLEWARE_ID)
