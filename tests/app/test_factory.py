"""Tests for modkit.app.factory: create_app."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from flask import Flask

from modkit import __version__
from modkit.app import HostApp, create_app
from modkit.modules import Module, ModuleRegistry, RegistryState


class _BootstrapModule(Module):
    """Binds *handler* on bootstrap and registers no routes."""

    def __init__(self, handler):
        self.handler = handler

    def prefix(self):
        return ""

    def register_hooks(self, app):
        app.on_bootstrap().bind_func(self.handler)

    def register_routes(self, groups):
        pass


class TestCreateApp:
    def test_returns_flask_app(self, make_app):
        assert isinstance(make_app(), Flask)

    def test_extensions_registered(self, make_app, config):
        app = make_app()
        assert isinstance(app.extensions["modkit"], HostApp)
        assert isinstance(app.extensions["module_registry"], ModuleRegistry)
        assert app.config["MODKIT_CONFIG"] is config

    def test_falls_back_to_global_config(self, config):
        with patch("modkit.app.factory.atexit.register"):
            app = create_app(configure_logs=False)
        assert app.config["MODKIT_CONFIG"] is config

    def test_missing_config_raises(self):
        with pytest.raises(RuntimeError, match="Configuration not initialised"):
            create_app(configure_logs=False)

    def test_registers_terminate_at_exit(self, config):
        with patch("modkit.app.factory.atexit.register") as register:
            app = create_app(config, configure_logs=False)
        register.assert_called_once_with(app.extensions["modkit"].terminate)

    def test_configures_logging(self, config):
        with (
            patch("modkit.app.factory.atexit.register"),
            patch("modkit.logging.configure_logging") as configure,
        ):
            create_app(config)
        configure.assert_called_once_with(config.settings.logging)

    def test_host_bootstrapped_and_serving(self, make_app):
        host = make_app().extensions["modkit"]
        assert host.is_bootstrapped
        assert host.router.is_built

    def test_stopped_bootstrap_fires_once_and_aborts(self, make_app):
        fired = []
        module = _BootstrapModule(lambda e: fired.append("boot"))
        with pytest.raises(RuntimeError, match="did not complete bootstrap"):
            make_app([module])
        assert fired == ["boot"]


class TestLivez:
    def test_livez(self, make_app):
        resp = make_app().test_client().get("/livez")
        assert resp.status_code == 200
        assert resp.get_json() == {
            "alive": True,
            "version": __version__,
            "modules": RegistryState.ROUTES_MOUNTED.value,
        }


class TestRequestHooks:
    def test_request_id_generated(self, make_app):
        resp = make_app().test_client().get("/livez")
        assert len(resp.headers["X-Request-ID"]) == 32

    def test_request_id_passthrough(self, make_app):
        resp = make_app().test_client().get("/livez", headers={"X-Request-ID": "abc"})
        assert resp.headers["X-Request-ID"] == "abc"

    def test_security_header(self, make_app):
        resp = make_app().test_client().get("/livez")
        assert resp.headers["X-Content-Type-Options"] == "nosniff"

    def test_not_found_is_problem(self, make_app):
        resp = make_app().test_client().get("/api/nothing")
        assert resp.status_code == 404
        assert resp.content_type == "application/problem+json"

    def test_access_log(self, make_app, caplog):
        client = make_app().test_client()
        with caplog.at_level("INFO", logger="modkit.access"):
            client.get("/livez")
        records = [r for r in caplog.records if r.name == "modkit.access"]
        assert len(records) == 1
        assert records[0].status == 200
        assert "GET /livez 200" in records[0].getMessage()
