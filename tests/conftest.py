"""Root conftest for the modkit test suite."""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

# ---------------------------------------------------------------------------
# Make ``src/`` importable without installing the package
# ---------------------------------------------------------------------------
_SRC = str(Path(__file__).resolve().parent.parent / "src")
if _SRC not in sys.path:
    sys.path.insert(0, _SRC)

TOKEN_SECRET = "test-secret-0123456789abcdef"


# ---------------------------------------------------------------------------
# Minimal config data shared by multiple test modules
# ---------------------------------------------------------------------------


@pytest.fixture()
def minimal_config_data() -> dict:
    """Return a dict containing the minimum required config fields."""
    return {
        "api": {"base_path": "/api"},
        "auth": {"token_secret": TOKEN_SECRET},
        "logging": {"level": "DEBUG", "format": "text"},
    }


@pytest.fixture()
def tmp_config_file(tmp_path: Path, minimal_config_data: dict) -> Path:
    """Write *minimal_config_data* to a temp YAML file and return its path."""
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        yaml.safe_dump(minimal_config_data, default_flow_style=False, sort_keys=False),
        encoding="utf-8",
    )
    return cfg


@pytest.fixture()
def config(minimal_config_data: dict):
    from modkit.config import ModkitConfig

    return ModkitConfig(data=minimal_config_data)


@pytest.fixture()
def settings(config):
    return config.settings


@pytest.fixture()
def host(settings):
    """A bare host application, no request hooks or error handlers."""
    from flask import Flask

    from modkit.app.host import HostApp

    return HostApp(settings, Flask("modkit_test"))


@pytest.fixture()
def make_app(config):
    """Factory building a full application without touching ``atexit``."""
    from modkit.app import create_app

    def _make(modules=(), cfg=None):
        with patch("modkit.app.factory.atexit.register"):
            app = create_app(cfg or config, modules, configure_logs=False)
        app.config["TESTING"] = True
        return app

    return _make


@pytest.fixture()
def token_for():
    """Return a helper creating bearer headers for an identity."""
    from modkit.auth import AuthIdentity, create_token

    def _headers(record_id: str = "u1", collection: str = "users") -> dict:
        token = create_token(AuthIdentity(id=record_id, collection=collection), TOKEN_SECRET)
        return {"Authorization": f"Bearer {token}"}

    return _headers


# ---------------------------------------------------------------------------
# Config singleton cleanup, autouse so every test gets a fresh slate
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def fresh_config():
    """Reset the ModkitConfig singleton before and after every test."""
    from modkit.config.modkit_config import ModkitConfig

    ModkitConfig.reset()
    yield
    ModkitConfig.reset()
