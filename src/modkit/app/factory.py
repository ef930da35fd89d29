"""Flask application factory for modkit hosts.

Usage::

    from modkit.app import create_app
    from modkit.config import ModkitConfig

    config = ModkitConfig(config_file="config.yaml")
    app = create_app(config=config, modules=[UsersModule(), BillingModule()])
"""

from __future__ import annotations

import atexit
import logging
from typing import TYPE_CHECKING

from flask import Flask, jsonify

if TYPE_CHECKING:
    from collections.abc import Iterable

    from flask.typing import ResponseReturnValue

    from modkit.config.modkit_config import ModkitConfig
    from modkit.modules import Module

log = logging.getLogger(__name__)


def create_app(
    config: ModkitConfig | None = None,
    modules: Iterable[Module] = (),
    *,
    configure_logs: bool = True,
) -> Flask:
    """Create a Flask application with *modules* composed into it.

    Parameters
    ----------
    config:
        Loaded :class:`ModkitConfig`.  Falls back to :func:`get_config`
        when ``None``.
    modules:
        Top-level modules, registered in the given order.
    configure_logs:
        Install the ``modkit`` log handlers from ``config``.

    Returns
    -------
    Flask
        Application with every module's hooks bound and routes mounted.

    Raises
    ------
    Exception
        Whatever a module raised while binding hooks or registering
        routes.  The application is not returned in that case.

    """
    if config is None:
        from modkit.config import get_config  # noqa: PLC0415

        config = get_config()

    settings = config.settings

    if configure_logs:
        from modkit.logging import configure_logging  # noqa: PLC0415

        configure_logging(settings.logging)

    from modkit.app.host import HostApp  # noqa: PLC0415

    host = HostApp(settings, Flask("modkit"))
    app = host.flask
    app.config["MODKIT_CONFIG"] = config

    # -- Error handlers (RFC 7807) ------------------------------------------
    from modkit.app.errors import register_error_handlers  # noqa: PLC0415

    register_error_handlers(app)

    # -- Request lifecycle hooks --------------------------------------------
    from modkit.app.middleware import register_request_hooks  # noqa: PLC0415

    register_request_hooks(app)

    # -- Infrastructure endpoints -------------------------------------------
    _register_health(app)

    # -- Modules ------------------------------------------------------------
    from modkit.modules import ModuleRegistry  # noqa: PLC0415

    registry = ModuleRegistry(host, settings.api.base_path)
    for module in modules:
        registry.register(module)
    app.extensions["module_registry"] = registry

    registry.init()
    host.bootstrap()
    host.serve()

    atexit.register(host.terminate)

    log.info(
        "Flask application created (%d top-level module(s), base_path=%r)",
        len(registry.modules),
        settings.api.base_path,
    )
    return app


# ---------------------------------------------------------------------------
# Infrastructure endpoints
# ---------------------------------------------------------------------------


def _register_health(app: Flask) -> None:
    """Register the ``/livez`` probe."""
    from modkit import __version__  # noqa: PLC0415

    @app.route("/livez")
    def livez() -> ResponseReturnValue:
        """Return minimal liveness probe."""
        registry = app.extensions.get("module_registry")
        body = {"alive": True, "version": __version__}
        if registry is not None:
            body["modules"] = registry.state.value
        return jsonify(body), 200
