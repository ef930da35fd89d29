"""Authentication tiers for modkit hosts.

Public API::

    from modkit.auth import require_auth, require_superuser_auth, create_token
"""

from modkit.auth.middleware import (
    REQUIRE_AUTH_MIDDLEWARE_ID,
    REQUIRE_SUPERUSER_AUTH_MIDDLEWARE_ID,
    load_auth,
    require_auth,
    require_superuser_auth,
)
from modkit.auth.tokens import AuthIdentity, create_token, decode_token

__all__ = [
    "REQUIRE_AUTH_MIDDLEWARE_ID",
    "REQUIRE_SUPERUSER_AUTH_MIDDLEWARE_ID",
    "AuthIdentity",
    "create_token",
    "decode_token",
    "load_auth",
    "require_auth",
    "require_superuser_auth",
]
