"""Tests for modkit.routing.router: Router and RouterGroup."""

from __future__ import annotations

import functools

import pytest
from flask import Flask

from modkit.routing import Middleware, Router, RouterError, RouterGroup


def _tracing(name, trace):
    """Middleware appending *name* to *trace* before calling the view."""

    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            trace.append(name)
            return fn(*args, **kwargs)

        return wrapper

    return Middleware(func=decorator, id=name)


@pytest.fixture()
def router():
    return Router()


@pytest.fixture()
def flask_app():
    app = Flask("router_test")
    app.config["TESTING"] = True
    return app


# =========================================================================
# Group tree
# =========================================================================


class TestGroups:
    def test_nested_prefixes(self, router):
        users = router.group("/api").group("v1").group("users")
        assert users.full_prefix == "/api/v1/users"

    def test_narrowing_leaves_parent_unchanged(self, router):
        api = router.group("/api")
        api.group("users")
        assert api.full_prefix == "/api"

    def test_root_is_router(self, router):
        assert router.group("a").group("b").root is router

    def test_bind_returns_group(self, router):
        group = router.group("a")
        assert group.bind(_tracing("m", [])) is group

    def test_middlewares_inherited_outermost_first(self, router):
        outer = router.group("a").bind(_tracing("outer", []))
        inner = outer.group("b").bind(_tracing("inner", []))
        assert [m.id for m in inner.middlewares] == ["outer", "inner"]
        assert [m.id for m in outer.middlewares] == ["outer"]

    def test_sibling_middlewares_do_not_leak(self, router):
        router.group("a").bind(_tracing("only-a", []))
        sibling = router.group("a")
        assert not sibling.has_middleware("only-a")

    def test_plain_callable_becomes_middleware(self, router):
        def audit(fn):
            return fn

        group = router.group("a").bind(audit)
        assert group.has_middleware("audit")


# =========================================================================
# Routes
# =========================================================================


class TestRoutes:
    def test_path_joined_with_group_prefix(self, router):
        route = router.group("/api").group("users").add("get", "/<user_id>", lambda user_id: user_id)
        assert route.method == "GET"
        assert route.path == "/api/users/<user_id>"

    def test_unsupported_method_raises(self, router):
        with pytest.raises(RouterError, match="Unsupported HTTP method"):
            router.group("a").add("FETCH", "/", lambda: "")

    def test_detached_group_raises(self):
        with pytest.raises(RouterError, match="must belong to a Router"):
            RouterGroup("/loose").add("GET", "/", lambda: "")

    def test_endpoints_unique_per_route(self, router):
        def view():
            return ""

        first = router.group("a").add("GET", "/", view)
        second = router.group("b").add("GET", "/", view)
        assert first.endpoint != second.endpoint

    def test_route_decorator_registers_each_method(self, router):
        group = router.group("items")

        @group.route("/", methods=("GET", "POST"))
        def items():
            return ""

        assert sorted(r.method for r, _ in router.iter_routes()) == ["GET", "POST"]

    def test_iter_routes_includes_route_middlewares(self, router):
        group = router.group("a").bind(_tracing("group", []))
        group.add("GET", "/", lambda: "").bind(_tracing("route", []))
        ((_, chain),) = list(router.iter_routes())
        assert [m.id for m in chain] == ["group", "route"]


# =========================================================================
# Build
# =========================================================================


class TestBuild:
    def test_routes_served_by_flask(self, router, flask_app):
        @router.group("/api").group("users").get("/<user_id>")
        def show(user_id):
            return f"user {user_id}"

        assert router.build(flask_app) == 1
        with flask_app.test_client() as client:
            resp = client.get("/api/users/42")
        assert resp.status_code == 200
        assert resp.data == b"user 42"

    def test_method_restricted(self, router, flask_app):
        @router.group("a").post("/")
        def create():
            return "created"

        router.build(flask_app)
        with flask_app.test_client() as client:
            assert client.get("/a").status_code == 405
            assert client.post("/a").data == b"created"

    def test_middlewares_run_outermost_first(self, router, flask_app):
        trace = []
        group = router.group("a").bind(_tracing("outer", trace))
        inner = group.group("b").bind(_tracing("inner", trace))

        @inner.get("/")
        def view():
            trace.append("view")
            return "ok"

        router.build(flask_app)
        with flask_app.test_client() as client:
            client.get("/a/b")
        assert trace == ["outer", "inner", "view"]

    def test_build_twice_raises(self, router, flask_app):
        router.build(flask_app)
        assert router.is_built
        with pytest.raises(RouterError, match="already been built"):
            router.build(flask_app)

    def test_not_built_initially(self, router):
        assert not router.is_built
