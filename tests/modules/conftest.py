"""Shared fixtures for module registry tests."""

from __future__ import annotations

import pytest

from modkit.modules import Module


class RecordingModule(Module):
    """Leaf module appending ``(phase, name)`` to a shared visit log."""

    def __init__(
        self,
        name,
        prefix="",
        *,
        visits,
        hook_error=None,
        route_error=None,
        on_hooks=None,
        on_routes=None,
    ):
        self.name = name
        self._prefix = prefix
        self.visits = visits
        self.hook_error = hook_error
        self.route_error = route_error
        self.on_hooks = on_hooks
        self.on_routes = on_routes
        self.app = None
        self.groups = None

    def __repr__(self):
        return f"RecordingModule({self.name!r})"

    def prefix(self):
        return self._prefix

    def register_hooks(self, app):
        self.visits.append(("hooks", self.name))
        self.app = app
        if self.hook_error is not None:
            raise self.hook_error
        if self.on_hooks is not None:
            self.on_hooks(app)

    def register_routes(self, groups):
        self.visits.append(("routes", self.name))
        self.groups = groups
        if self.route_error is not None:
            raise self.route_error
        if self.on_routes is not None:
            self.on_routes(groups)


class RecordingParent(RecordingModule):
    """Recording module that also owns child modules."""

    def __init__(self, name, prefix="", children=(), **kwargs):
        super().__init__(name, prefix, **kwargs)
        self._children = list(children)
        self.children_calls = 0

    def children(self):
        self.children_calls += 1
        return self._children


@pytest.fixture()
def visits() -> list:
    return []


@pytest.fixture()
def leaf(visits):
    """Factory for leaf modules sharing the ``visits`` log."""

    def _leaf(name, prefix="", **kwargs):
        return RecordingModule(name, prefix, visits=visits, **kwargs)

    return _leaf


@pytest.fixture()
def parent(visits):
    """Factory for parent modules sharing the ``visits`` log."""

    def _parent(name, prefix="", children=(), **kwargs):
        return RecordingParent(name, prefix, children, visits=visits, **kwargs)

    return _parent


@pytest.fixture()
def registry(host):
    from modkit.modules import ModuleRegistry

    return ModuleRegistry(host, "/api")


@pytest.fixture()
def phase_names(visits):
    """Return the module names visited in *phase*, in order."""

    def _names(phase):
        return [name for p, name in visits if p == phase]

    return _names
