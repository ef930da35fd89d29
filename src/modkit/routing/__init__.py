"""Grouped routing for modkit hosts.

Public API::

    from modkit.routing import Router, RouterGroup, Middleware, join_path
"""

from modkit.routing.paths import join_path
from modkit.routing.router import Middleware, Route, Router, RouterError, RouterGroup

__all__ = [
    "Middleware",
    "Route",
    "Router",
    "RouterError",
    "RouterGroup",
    "join_path",
]
