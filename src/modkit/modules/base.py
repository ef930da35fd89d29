"""The contract every pluggable module implements.

Usage::

    from modkit.modules import Module

    class UsersModule(Module):
        def prefix(self) -> str:
            return "users"

        def register_hooks(self, app: AppHooks) -> None:
            app.on_record_create("users").bind_func(self._normalise)

        def register_routes(self, groups: RouterGroups) -> None:
            groups.public.get("/")(self.list_users)
            groups.admin.delete("/<user_id>")(self.delete_user)

A module owning sub-modules also defines ``children()``; it is detected
by capability (:class:`ModuleWithChildren`), not by a base class.
"""

from __future__ import annotations

import abc
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from modkit.hooks import AppHooks
    from modkit.modules.groups import RouterGroups


class Module(abc.ABC):
    """Base class for modules plugged into a :class:`ModuleRegistry`."""

    @abc.abstractmethod
    def prefix(self) -> str:
        """Return this module's own path segment.

        Appended to the prefix supplied by the parent module.  Must be
        stable across calls; an empty string contributes nothing.
        """

    @abc.abstractmethod
    def register_hooks(self, app: AppHooks) -> None:
        """Bind lifecycle hook handlers.

        Must not register routes.  Raising aborts the host bootstrap.
        """

    @abc.abstractmethod
    def register_routes(self, groups: RouterGroups) -> None:
        """Register routes on *groups*, already narrowed to this module.

        Raising aborts the host serve start.
        """


@runtime_checkable
class ModuleWithChildren(Protocol):
    """Capability of modules that own child modules.

    ``children()`` must return the same sequence on every call; it is
    called once by each registry traversal.
    """

    def children(self) -> Sequence[Module]: ...


def children_of(module: Module) -> Sequence[Module]:
    """Return *module*'s children, or an empty tuple for leaves."""
    if isinstance(module, ModuleWithChildren):
        return module.children()
    return ()
