"""Module registry: composes a forest of modules into the host.

The registry walks the registered module tree twice, both times in
strict pre-order (a module before its children, children in declared
order, top-level modules in registration order):

1. :meth:`ModuleRegistry.init` immediately calls ``register_hooks`` on
   every module.
2. It then binds a single handler on the host's ``on_serve`` hook.  When
   the host starts serving, that handler builds the three root route
   tiers under the registry's base path and calls ``register_routes`` on
   every module with the tiers narrowed to the module's full prefix.

Both walks are fail-fast: the first exception raised by a module stops
the walk and propagates unchanged.  Nothing already bound or mounted is
rolled back.

Usage::

    registry = ModuleRegistry(host, "/api")
    registry.register(UsersModule())
    registry.register(BillingModule())
    registry.init()
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Any

from modkit.auth import require_auth, require_superuser_auth
from modkit.modules.base import children_of
from modkit.modules.groups import RouterGroups

if TYPE_CHECKING:
    from collections.abc import Iterator

    from modkit.app.host import HostApp
    from modkit.hooks import ServeEvent
    from modkit.modules.base import Module
    from modkit.routing import Router

log = logging.getLogger(__name__)


class RegistryState(enum.Enum):
    """Lifecycle of a :class:`ModuleRegistry`."""

    UNINITIALIZED = "uninitialized"
    HOOKS_BOUND = "hooks_bound"
    ROUTES_SCHEDULED = "routes_scheduled"
    ROUTES_MOUNTED = "routes_mounted"
    FAILED = "failed"


class RegistryStateError(RuntimeError):
    """Raised when the registry is used out of lifecycle order."""


def _describe(module: Module) -> str:
    return f"{type(module).__name__}(prefix={module.prefix()!r})"


class ModuleRegistry:
    """Ordered set of top-level modules bound to one host application.

    Parameters
    ----------
    app:
        The host.  Modules receive it as their hook surface; the
        registry itself only uses its ``on_serve`` hook.
    api_prefix:
        Base path under which all module routes are mounted.

    """

    def __init__(self, app: HostApp, api_prefix: str = "") -> None:
        self._app = app
        self._api_prefix = api_prefix
        self._modules: list[Module] = []
        self._state = RegistryState.UNINITIALIZED
        self._serve_handler_id: str | None = None

    @property
    def api_prefix(self) -> str:
        return self._api_prefix

    @property
    def modules(self) -> tuple[Module, ...]:
        """Registered top-level modules, in registration order."""
        return tuple(self._modules)

    @property
    def state(self) -> RegistryState:
        return self._state

    def register(self, module: Module) -> None:
        """Append *module* to the top-level sequence.

        Registering the same instance twice makes it visited twice.
        """
        if self._state is not RegistryState.UNINITIALIZED:
            msg = f"Cannot register modules once the registry is {self._state.value}"
            raise RegistryStateError(msg)
        self._modules.append(module)
        log.debug("Registered module %s", _describe(module))

    def walk(self) -> Iterator[Module]:
        """Yield every registered module and descendant in pre-order."""

        def _walk(module: Module) -> Iterator[Module]:
            yield module
            for child in children_of(module):
                yield from _walk(child)

        for module in self._modules:
            yield from _walk(module)

    # -- phase 1: hooks ----------------------------------------------------

    def init(self) -> None:
        """Bind every module's hooks and schedule route mounting.

        Raises whatever the first failing ``register_hooks`` raises.
        """
        if self._state is not RegistryState.UNINITIALIZED:
            msg = f"Registry already initialised (state={self._state.value})"
            raise RegistryStateError(msg)

        visited = 0
        try:
            for module in self._modules:
                visited += self._register_module_hooks(module)
        except Exception:
            self._state = RegistryState.FAILED
            raise
        self._state = RegistryState.HOOKS_BOUND
        log.info("Bound hooks for %d module(s)", visited)

        self._serve_handler_id = self._app.on_serve().bind_func(self._on_serve)
        self._state = RegistryState.ROUTES_SCHEDULED

    def _register_module_hooks(self, module: Module) -> int:
        try:
            module.register_hooks(self._app)
        except Exception:
            log.critical(
                "Module %s failed to register hooks; aborting bootstrap",
                _describe(module),
                exc_info=True,
            )
            raise
        log.debug("Registered hooks of %s", _describe(module))

        visited = 1
        for child in children_of(module):
            visited += self._register_module_hooks(child)
        return visited

    # -- phase 2: routes ---------------------------------------------------

    def root_groups(self, router: Router) -> RouterGroups:
        """Build the three root tiers on *router* under the base path."""
        public = router.group(self._api_prefix)
        authenticated = router.group(self._api_prefix).bind(require_auth())
        admin = router.group(self._api_prefix).bind(require_superuser_auth())
        return RouterGroups(public=public, authenticated=authenticated, admin=admin)

    def _on_serve(self, e: ServeEvent) -> Any:  # noqa: ANN401
        if self._state is not RegistryState.ROUTES_SCHEDULED:
            msg = f"Module routes cannot be mounted (state={self._state.value})"
            raise RegistryStateError(msg)

        base_groups = self.root_groups(e.router)
        visited = 0
        try:
            for module in self._modules:
                visited += self._serve_module(module, base_groups)
        except Exception:
            self._state = RegistryState.FAILED
            raise
        self._state = RegistryState.ROUTES_MOUNTED
        log.info(
            "Mounted routes for %d module(s) under %r",
            visited,
            self._api_prefix or "/",
        )

        return e.next()

    def _serve_module(self, module: Module, base_groups: RouterGroups) -> int:
        groups = base_groups.with_prefix(module.prefix())
        try:
            module.register_routes(groups)
        except Exception:
            log.critical(
                "Module %s failed to register routes; aborting serve",
                _describe(module),
                exc_info=True,
            )
            raise
        log.debug(
            "Registered routes of %s at %s",
            _describe(module),
            groups.public.full_prefix,
        )

        visited = 1
        for child in children_of(module):
            visited += self._serve_module(child, groups)
        return visited
