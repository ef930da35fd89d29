"""Signed bearer tokens for authenticated route tiers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

log = logging.getLogger(__name__)

_SALT = "modkit.auth"


@dataclass(frozen=True)
class AuthIdentity:
    """The authenticated principal of a request."""

    id: str  # noqa: A003
    collection: str
    is_superuser: bool = False


def create_token(identity: AuthIdentity, secret: str) -> str:
    """Create a signed bearer token for *identity*."""
    serializer = URLSafeTimedSerializer(secret, salt=_SALT)
    return serializer.dumps(
        {
            "id": identity.id,
            "collection": identity.collection,
        }
    )


def decode_token(
    token: str,
    secret: str,
    max_age: int,
) -> dict[str, Any] | None:
    """Decode and validate a bearer token.

    Returns the payload dict or ``None`` if invalid/expired.
    """
    serializer = URLSafeTimedSerializer(secret, salt=_SALT)
    try:
        payload = serializer.loads(token, max_age=max_age)
    except SignatureExpired:
        log.debug("Rejected expired bearer token")
        return None
    except BadSignature:
        log.debug("Rejected bearer token with bad signature")
        return None
    if not isinstance(payload, dict) or "id" not in payload or "collection" not in payload:
        return None
    return payload
