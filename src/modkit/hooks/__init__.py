"""Lifecycle hook bus for modkit hosts.

Public API::

    from modkit.hooks import AppHooks, Event, Hook, TaggedHook

    app.on_record_create("posts").bind_func(lambda e: e.next())
"""

from modkit.hooks.base import BootstrapEvent, Event, ServeEvent, TerminateEvent
from modkit.hooks.events import EVENT_METHOD_MAP, HOOK_SPECS, KNOWN_EVENTS
from modkit.hooks.hook import Handler, Hook, TaggedHook
from modkit.hooks.surface import AppHooks

__all__ = [
    "EVENT_METHOD_MAP",
    "HOOK_SPECS",
    "KNOWN_EVENTS",
    "AppHooks",
    "BootstrapEvent",
    "Event",
    "Handler",
    "Hook",
    "ServeEvent",
    "TaggedHook",
    "TerminateEvent",
]
