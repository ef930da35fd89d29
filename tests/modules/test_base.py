"""Tests for modkit.modules.base: module contract and child capability."""

from __future__ import annotations

import pytest

from modkit.modules import Module, ModuleWithChildren, children_of


class TestModuleContract:
    def test_abstract_methods_required(self):
        class Incomplete(Module):
            def prefix(self):
                return "x"

        with pytest.raises(TypeError):
            Incomplete()

    def test_leaf_is_not_a_parent(self, leaf):
        assert not isinstance(leaf("a"), ModuleWithChildren)

    def test_parent_detected_by_capability(self, parent):
        assert isinstance(parent("p"), ModuleWithChildren)

    def test_children_detected_without_base_class(self):
        class Duck:
            def children(self):
                return ()

        assert isinstance(Duck(), ModuleWithChildren)


class TestChildrenOf:
    def test_leaf_has_no_children(self, leaf):
        assert tuple(children_of(leaf("a"))) == ()

    def test_parent_children_in_declared_order(self, leaf, parent):
        kids = [leaf("x"), leaf("y"), leaf("z")]
        assert list(children_of(parent("p", children=kids))) == kids

    def test_each_call_invokes_children_once(self, leaf, parent):
        p = parent("p", children=[leaf("x")])
        children_of(p)
        children_of(p)
        assert p.children_calls == 2
