"""Authorization-tiered route group triple."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from modkit.routing import RouterGroup


@dataclass(frozen=True)
class RouterGroups:
    """The three route tiers handed to :meth:`Module.register_routes`.

    ``public`` has no authorization requirement, ``authenticated``
    requires any authenticated identity and ``admin`` requires a
    superuser.  The requirements are attached when the root triple is
    built and are inherited by every narrowed triple.
    """

    public: RouterGroup
    authenticated: RouterGroup
    admin: RouterGroup

    def with_prefix(self, prefix: str) -> RouterGroups:
        """Return a new triple with every tier narrowed by *prefix*.

        An empty prefix returns this triple unchanged.
        """
        if not prefix:
            return self
        return RouterGroups(
            public=self.public.group(prefix),
            authenticated=self.authenticated.group(prefix),
            admin=self.admin.group(prefix),
        )
