"""Grouped router compiled into Flask URL rules.

Routes are collected into a tree of :class:`RouterGroup` objects while
the host is starting and compiled into the Flask application once, by
:meth:`Router.build`.  A group contributes its path prefix and its
middlewares to every route below it::

    router = Router()
    api = router.group("/api")
    admin = api.group("admin").bind(require_superuser_auth())

    @admin.get("/stats")
    def stats():
        ...

    router.build(flask_app)      # GET /api/admin/stats
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from modkit.routing.paths import join_path

if TYPE_CHECKING:
    from collections.abc import Iterator

    from flask import Flask

log = logging.getLogger(__name__)

View = Callable[..., Any]

_HTTP_METHODS = frozenset(
    {"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"},
)


class RouterError(Exception):
    """Raised on invalid router usage (bad method, double build)."""


@dataclass(frozen=True)
class Middleware:
    """A view decorator with an identifier.

    ``func`` takes a view function and returns the wrapped view.
    """

    func: Callable[[View], View]
    id: str  # noqa: A003


@dataclass
class Route:
    """A single registered route, path already fully prefixed."""

    method: str
    path: str
    view: View
    endpoint: str
    middlewares: list[Middleware] = field(default_factory=list)

    def bind(self, *middlewares: Middleware | Callable[[View], View]) -> Route:
        self.middlewares.extend(_as_middleware(m) for m in middlewares)
        return self


def _as_middleware(mw: Middleware | Callable[[View], View]) -> Middleware:
    if isinstance(mw, Middleware):
        return mw
    return Middleware(func=mw, id=getattr(mw, "__name__", repr(mw)))


class RouterGroup:
    """A path-prefixed node of the routing tree.

    Child groups inherit the prefix and the middlewares of every
    ancestor.  Narrowing with :meth:`group` never changes the parent's
    own prefix.
    """

    def __init__(self, prefix: str = "", parent: RouterGroup | None = None) -> None:
        self.prefix = prefix
        self.parent = parent
        self._middlewares: list[Middleware] = []
        self._children: list[RouterGroup | Route] = []

    def __repr__(self) -> str:
        return f"RouterGroup({self.full_prefix!r})"

    # -- tree --------------------------------------------------------------

    @property
    def root(self) -> RouterGroup:
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def full_prefix(self) -> str:
        """Rooted path of this group, ancestors applied outer-to-inner."""
        parts: list[str] = []
        node: RouterGroup | None = self
        while node is not None:
            parts.append(node.prefix)
            node = node.parent
        return join_path(*reversed(parts))

    @property
    def middlewares(self) -> tuple[Middleware, ...]:
        """Effective middlewares, outermost (root) first."""
        chain: list[Middleware] = []
        node: RouterGroup | None = self
        while node is not None:
            chain[:0] = node._middlewares  # noqa: SLF001
            node = node.parent
        return tuple(chain)

    def group(self, prefix: str) -> RouterGroup:
        """Create and return a child group under *prefix*."""
        child = RouterGroup(prefix, parent=self)
        self._children.append(child)
        return child

    def bind(self, *middlewares: Middleware | Callable[[View], View]) -> RouterGroup:
        """Attach middlewares to this group and all routes below it."""
        self._middlewares.extend(_as_middleware(m) for m in middlewares)
        return self

    def has_middleware(self, middleware_id: str) -> bool:
        return any(m.id == middleware_id for m in self.middlewares)

    # -- routes ------------------------------------------------------------

    def add(
        self,
        method: str,
        rule: str,
        view: View,
        *,
        endpoint: str | None = None,
    ) -> Route:
        """Register *view* for ``method rule`` relative to this group."""
        method = method.upper()
        if method not in _HTTP_METHODS:
            msg = f"Unsupported HTTP method '{method}'"
            raise RouterError(msg)
        root = self.root
        if not isinstance(root, Router):
            msg = "Route groups must belong to a Router"
            raise RouterError(msg)
        route = Route(
            method=method,
            path=join_path(self.full_prefix, rule),
            view=view,
            endpoint=endpoint or root._next_endpoint(view),  # noqa: SLF001
        )
        self._children.append(route)
        return route

    def route(
        self,
        rule: str,
        methods: tuple[str, ...] | list[str] = ("GET",),
        *,
        endpoint: str | None = None,
    ) -> Callable[[View], View]:
        """Decorator form of :meth:`add` for one or more methods."""

        def decorator(view: View) -> View:
            for method in methods:
                self.add(method, rule, view, endpoint=endpoint if len(methods) == 1 else None)
            return view

        return decorator

    def get(self, rule: str) -> Callable[[View], View]:
        return self.route(rule, ("GET",))

    def post(self, rule: str) -> Callable[[View], View]:
        return self.route(rule, ("POST",))

    def put(self, rule: str) -> Callable[[View], View]:
        return self.route(rule, ("PUT",))

    def patch(self, rule: str) -> Callable[[View], View]:
        return self.route(rule, ("PATCH",))

    def delete(self, rule: str) -> Callable[[View], View]:
        return self.route(rule, ("DELETE",))

    def iter_routes(self) -> Iterator[tuple[Route, tuple[Middleware, ...]]]:
        """Yield every route below this group with its middleware chain."""
        inherited = self.middlewares
        for child in self._children:
            if isinstance(child, Route):
                yield child, inherited + tuple(child.middlewares)
            else:
                yield from child.iter_routes()


class Router(RouterGroup):
    """Root of the routing tree."""

    def __init__(self) -> None:
        super().__init__("")
        self._endpoint_ids = itertools.count(1)
        self._built = False

    @property
    def is_built(self) -> bool:
        return self._built

    def _next_endpoint(self, view: View) -> str:
        name = getattr(view, "__name__", "view")
        return f"{name}_{next(self._endpoint_ids)}"

    def build(self, app: Flask) -> int:
        """Compile all routes into URL rules on *app*.

        Returns the number of rules added.  A router can only be built
        once.
        """
        if self._built:
            msg = "Router has already been built"
            raise RouterError(msg)
        self._built = True

        count = 0
        for route, chain in self.iter_routes():
            view = route.view
            for mw in reversed(chain):
                view = mw.func(view)
            app.add_url_rule(
                route.path,
                endpoint=route.endpoint,
                view_func=view,
                methods=[route.method],
            )
            log.debug(
                "Mounted %s %s (middlewares=%s)",
                route.method,
                route.path,
                [m.id for m in chain],
            )
            count += 1

        log.info("Router built with %d route(s)", count)
        return count
