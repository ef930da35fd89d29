"""Tests for modkit.hooks.surface: AppHooks as exposed by HostApp."""

from __future__ import annotations

import pytest

from modkit.hooks import Event, Hook, TaggedHook
from modkit.hooks.events import HOOK_SPECS


class TestSurface:
    @pytest.mark.parametrize("spec", HOOK_SPECS, ids=lambda s: s.name)
    def test_every_point_resolves(self, host, spec):
        if spec.tagged:
            point = getattr(host, spec.method)("posts")
            assert isinstance(point, TaggedHook)
            assert point.hook.name == spec.name
            assert point.tags == frozenset({"posts"})
        else:
            point = getattr(host, spec.method)()
            assert isinstance(point, Hook)
            assert point.name == spec.name

    def test_same_hook_on_every_call(self, host):
        assert host.on_bootstrap() is host.on_bootstrap()
        assert host.on_record_create("a").hook is host.on_record_create("b").hook

    def test_unknown_event_raises(self, host):
        with pytest.raises(ValueError, match="Unknown hook event"):
            host.hook("nope.nothing")

    def test_tagged_point_filters_by_collection(self, host):
        calls = []
        host.on_record_create("posts").bind_func(
            lambda e: calls.append(e.data["id"]) or e.next(),
        )
        host.on_record_create().trigger(Event(tags=["posts"], id=1))
        host.on_record_create().trigger(Event(tags=["users"], id=2))
        assert calls == [1]

    def test_serve_hook_is_separate(self, host):
        assert host.on_serve().name == "app.serve"
        assert host.on_serve() is host.on_serve()
