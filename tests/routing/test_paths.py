"""Tests for modkit.routing.paths: join_path."""

from __future__ import annotations

import pytest

from modkit.routing import join_path


@pytest.mark.parametrize(
    ("parts", "expected"),
    [
        ((), "/"),
        (("",), "/"),
        (("api",), "/api"),
        (("/api/", "v1"), "/api/v1"),
        (("/api", "", "users"), "/api/users"),
        (("api", "/"), "/api"),
        (("v1/users",), "/v1/users"),
        (("/api", "<user_id>"), "/api/<user_id>"),
    ],
)
def test_join_path(parts, expected):
    assert join_path(*parts) == expected


def test_join_is_associative():
    assert join_path(join_path("a", "b"), "c") == join_path("a", join_path("b", "c"))
