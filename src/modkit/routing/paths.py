"""URL path composition for router groups."""

from __future__ import annotations


def join_path(*parts: str) -> str:
    """Join path fragments into a single rooted path.

    Surrounding slashes of every fragment are stripped and empty
    fragments are skipped, so composition is associative::

        join_path("v1", "users") == join_path("v1/users") == "/v1/users"
        join_path("/api/", "", "x") == "/api/x"
        join_path() == "/"
    """
    segments = [p.strip("/") for p in parts]
    return "/" + "/".join(s for s in segments if s)
