"""Tests for modkit.hooks.events: event name and method registry."""

from __future__ import annotations

from modkit.hooks import AppHooks
from modkit.hooks.events import (
    EVENT_METHOD_MAP,
    HOOK_SPECS,
    KNOWN_EVENTS,
    TAGGED_EVENTS,
)


class TestHookSpecs:
    def test_surface_size(self):
        assert len(HOOK_SPECS) == 82

    def test_names_unique(self):
        assert len(KNOWN_EVENTS) == len(HOOK_SPECS)

    def test_methods_unique(self):
        methods = [spec.method for spec in HOOK_SPECS]
        assert len(set(methods)) == len(methods)

    def test_methods_exist_on_surface(self):
        for spec in HOOK_SPECS:
            assert callable(getattr(AppHooks, spec.method, None)), spec.method

    def test_surface_has_no_unlisted_methods(self):
        surface = {name for name in vars(AppHooks) if name.startswith("on_")}
        assert surface == set(EVENT_METHOD_MAP.values())

    def test_tagged_subset(self):
        assert TAGGED_EVENTS <= KNOWN_EVENTS
        assert "model.create" in TAGGED_EVENTS
        assert "app.bootstrap" not in TAGGED_EVENTS

    def test_family_expansion(self):
        for kind in ("model", "record", "collection"):
            for action in ("create", "update", "delete"):
                assert f"{kind}.{action}" in KNOWN_EVENTS
                assert f"{kind}.{action}_execute" in KNOWN_EVENTS
                assert f"{kind}.after_{action}_success" in KNOWN_EVENTS
                assert f"{kind}.after_{action}_error" in KNOWN_EVENTS
            assert f"{kind}.validate" in KNOWN_EVENTS
