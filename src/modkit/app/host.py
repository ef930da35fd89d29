"""The host application modules plug into.

:class:`HostApp` wraps a Flask application and owns the lifecycle hook
bus.  It fires three lifecycle moments:

``bootstrap()``
    triggers :meth:`~modkit.hooks.AppHooks.on_bootstrap`.
``serve()``
    creates a fresh :class:`~modkit.routing.Router`, triggers
    :meth:`HostApp.on_serve` with it and, as the last link of that
    chain, compiles the router into the Flask URL map.  A serve handler
    that raises aborts the start and nothing is compiled.
``terminate()``
    triggers :meth:`~modkit.hooks.AppHooks.on_terminate`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from flask import Flask

from modkit.hooks import (
    HOOK_SPECS,
    AppHooks,
    BootstrapEvent,
    Hook,
    ServeEvent,
    TerminateEvent,
)
from modkit.routing import Router

if TYPE_CHECKING:
    from modkit.config.settings import ModkitSettings

log = logging.getLogger(__name__)


class HostApp(AppHooks):
    """Flask host exposing the full hook surface plus ``on_serve``.

    Parameters
    ----------
    settings:
        The typed settings tree.  Stored on the Flask config as
        ``MODKIT_SETTINGS`` for request-time consumers.
    flask_app:
        The Flask application to mount routes on.  A new one is created
        when omitted.

    """

    def __init__(self, settings: ModkitSettings, flask_app: Flask | None = None) -> None:
        self.settings = settings
        self.flask = flask_app if flask_app is not None else Flask("modkit")
        self.flask.config["MODKIT_SETTINGS"] = settings
        self.flask.extensions["modkit"] = self

        self._hooks: dict[str, Hook] = {spec.name: Hook(spec.name) for spec in HOOK_SPECS}
        self._on_serve = Hook("app.serve")
        self._router: Router | None = None
        self._bootstrap_fired = False
        self._bootstrapped = False
        self._terminated = False

    # -- hook surface ------------------------------------------------------

    def hook(self, name: str) -> Hook:
        try:
            return self._hooks[name]
        except KeyError:
            msg = f"Unknown hook event '{name}'. Known events: {sorted(self._hooks)}"
            raise ValueError(msg) from None

    def on_serve(self) -> Hook:
        """Triggered when the host starts serving HTTP requests."""
        return self._on_serve

    # -- lifecycle ---------------------------------------------------------

    @property
    def is_bootstrapped(self) -> bool:
        return self._bootstrapped

    @property
    def router(self) -> Router | None:
        """Router of the current serve, ``None`` before :meth:`serve`."""
        return self._router

    def bootstrap(self) -> None:
        """Fire the bootstrap event once.

        A chain that stops before completion still counts as fired.
        """
        if self._bootstrap_fired:
            msg = "Host application already bootstrapped"
            raise RuntimeError(msg)

        def _finish(e: BootstrapEvent) -> None:
            self._bootstrapped = True

        self._bootstrap_fired = True
        self.on_bootstrap().trigger(BootstrapEvent(app=self), oneoff=_finish)
        if not self._bootstrapped:
            log.warning("Bootstrap chain stopped before completion")
        else:
            log.info("Host application bootstrapped")

    def serve(self) -> Flask:
        """Fire the serve event and compile the routes it registered.

        Returns the Flask application, ready to handle requests.
        """
        if not self._bootstrap_fired:
            self.bootstrap()
        if not self._bootstrapped:
            msg = "Host application did not complete bootstrap"
            raise RuntimeError(msg)
        if self._router is not None:
            msg = "Host application is already serving"
            raise RuntimeError(msg)

        router = Router()
        self._router = router

        def _build(e: ServeEvent) -> Any:  # noqa: ANN401
            return e.router.build(self.flask)

        self.on_serve().trigger(ServeEvent(app=self, router=router), oneoff=_build)
        if not router.is_built:
            log.warning("Serve chain stopped before routes were built")
        return self.flask

    def terminate(self, *, is_restart: bool = False) -> None:
        """Fire the terminate event once."""
        if self._terminated:
            return
        self._terminated = True
        self.on_terminate().trigger(TerminateEvent(app=self, is_restart=is_restart))
        log.info("Host application terminated")

    def run(self) -> None:
        """Serve with the development server on the configured address."""
        app = self.serve()
        server = self.settings.server
        app.run(
            host=server.bind,
            port=server.port,
            debug=server.debug,
            use_reloader=False,
        )
