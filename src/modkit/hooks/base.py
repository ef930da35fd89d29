"""Event objects passed through the hook chains.

Every handler receives a single event and decides whether the rest of
the chain runs by calling :meth:`Event.next`::

    def log_boot(e: BootstrapEvent) -> None:
        log.info("booting")
        e.next()
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from modkit.routing import Router


class Event:
    """Base event carrying origin tags and arbitrary keyword data.

    Parameters
    ----------
    tags:
        Origin tags of the event (e.g. a collection name).  Tagged
        hooks only run handlers whose tags intersect these.
    **data:
        Event specific payload, available as :attr:`data`.

    """

    def __init__(self, *, tags: Iterable[str] = (), **data: Any) -> None:
        self.tags: frozenset[str] = frozenset(tags)
        self.data: dict[str, Any] = data
        self._chain: list[Callable[[Event], Any]] = []
        self._position = 0

    def next(self) -> Any:  # noqa: A003
        """Run the next handler of the current chain, if any."""
        if self._position >= len(self._chain):
            return None
        func = self._chain[self._position]
        self._position += 1
        return func(self)

    def _run(self, chain: list[Callable[[Event], Any]]) -> Any:
        """Run *chain* on this event, restoring any outer chain after."""
        saved = (self._chain, self._position)
        self._chain, self._position = chain, 0
        try:
            return self.next()
        finally:
            self._chain, self._position = saved


class BootstrapEvent(Event):
    """Fired once when the host initialises its resources."""

    def __init__(self, app: Any, **data: Any) -> None:  # noqa: ANN401
        super().__init__(**data)
        self.app = app


class TerminateEvent(Event):
    """Fired when the host is shutting down."""

    def __init__(self, app: Any, *, is_restart: bool = False, **data: Any) -> None:  # noqa: ANN401
        super().__init__(**data)
        self.app = app
        self.is_restart = is_restart


class ServeEvent(Event):
    """Fired when the host starts serving; carries the fresh router."""

    def __init__(self, app: Any, router: Router, **data: Any) -> None:  # noqa: ANN401
        super().__init__(**data)
        self.app = app
        self.router = router
