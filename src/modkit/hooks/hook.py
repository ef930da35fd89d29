"""Synchronous hook chains.

A :class:`Hook` holds an ordered list of handlers.  Triggering it runs
the first handler; each handler continues the chain by calling
``event.next()`` and may return early (or raise) to stop it.  The
exception of a handler always propagates to the caller of
:meth:`Hook.trigger`.

A :class:`TaggedHook` is a filtered view onto a :class:`Hook`: handlers
bound through it run only for events whose origin tags intersect the
view's tags.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from uuid import uuid4

from modkit.hooks.base import Event

log = logging.getLogger(__name__)

HandlerFunc = Callable[[Event], Any]


@dataclass
class Handler:
    """A bound hook handler.

    ``id`` is generated on bind when empty.  Lower ``priority`` runs
    first; equal priorities keep bind order.
    """

    func: HandlerFunc
    id: str = ""  # noqa: A003
    priority: int = 0


class Hook:
    """Ordered chain of handlers for a single named event."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._handlers: list[Handler] = []
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Hook({self.name!r}, handlers={self.length()})"

    def bind(self, handler: Handler) -> str:
        """Register *handler* and return its id.

        Binding a handler whose id is already registered replaces the
        existing one in place.
        """
        if not handler.id:
            handler.id = uuid4().hex
        with self._lock:
            for idx, existing in enumerate(self._handlers):
                if existing.id == handler.id:
                    self._handlers[idx] = handler
                    break
            else:
                self._handlers.append(handler)
            self._handlers.sort(key=lambda h: h.priority)
        log.debug("Bound handler %s on hook '%s'", handler.id, self.name)
        return handler.id

    def bind_func(self, func: HandlerFunc) -> str:
        """Shorthand for ``bind(Handler(func=func))``."""
        return self.bind(Handler(func=func))

    def unbind(self, *ids: str) -> None:
        with self._lock:
            self._handlers = [h for h in self._handlers if h.id not in ids]

    def unbind_all(self) -> None:
        with self._lock:
            self._handlers = []

    def length(self) -> int:
        with self._lock:
            return len(self._handlers)

    def trigger(self, event: Event, oneoff: HandlerFunc | None = None) -> Any:  # noqa: ANN401
        """Run the handler chain for *event*.

        Parameters
        ----------
        event:
            The event passed to every handler.
        oneoff:
            Optional final link appended after the bound handlers for
            this trigger only (the host's default action).

        """
        with self._lock:
            chain = [h.func for h in self._handlers]
        if oneoff is not None:
            chain.append(oneoff)
        return event._run(chain)  # noqa: SLF001


class TaggedHook:
    """A view of *hook* restricted to events carrying one of *tags*.

    With no tags every event matches.
    """

    def __init__(self, hook: Hook, *tags: str) -> None:
        self.hook = hook
        self.tags: frozenset[str] = frozenset(tags)

    def __repr__(self) -> str:
        return f"TaggedHook({self.hook.name!r}, tags={sorted(self.tags)})"

    def can_trigger_on(self, tags: frozenset[str]) -> bool:
        if not self.tags:
            return True
        return bool(self.tags & tags)

    def bind(self, handler: Handler) -> str:
        func = handler.func

        def _filtered(e: Event) -> Any:  # noqa: ANN401
            if self.can_trigger_on(e.tags):
                return func(e)
            return e.next()

        return self.hook.bind(
            Handler(func=_filtered, id=handler.id, priority=handler.priority),
        )

    def bind_func(self, func: HandlerFunc) -> str:
        return self.bind(Handler(func=func))

    def unbind(self, *ids: str) -> None:
        self.hook.unbind(*ids)

    def length(self) -> int:
        return self.hook.length()

    def trigger(self, event: Event, oneoff: HandlerFunc | None = None) -> Any:  # noqa: ANN401
        return self.hook.trigger(event, oneoff)
