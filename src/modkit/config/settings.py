"""Typed, frozen dataclasses for every configuration section.

This module is the **single source of truth** for default values.

Access pattern::

    from modkit.config import get_config

    api = get_config().settings.api
    print(api.base_path)
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ServerSettings:
    """HTTP server configuration (bind address, port, debug)."""

    bind: str
    port: int
    debug: bool


def _build_server(data: dict | None) -> ServerSettings:
    d = data or {}
    return ServerSettings(
        bind=d.get("bind", "127.0.0.1"),
        port=d.get("port", 8090),
        debug=d.get("debug", False),
    )


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ApiSettings:
    """General API settings (base path under which modules mount)."""

    base_path: str


def _build_api(data: dict | None) -> ApiSettings:
    d = data or {}
    return ApiSettings(
        base_path=d.get("base_path", "/api"),
    )


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AuthSettings:
    """Bearer token settings for the authenticated and admin tiers."""

    token_secret: str
    token_expiry_seconds: int
    superuser_collection: str


def _build_auth(data: dict | None) -> AuthSettings:
    d = data or {}
    return AuthSettings(
        token_secret=d.get("token_secret", ""),
        token_expiry_seconds=d.get("token_expiry_seconds", 1209600),
        superuser_collection=d.get("superuser_collection", "_superusers"),
    )


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LoggingSettings:
    """Application logging configuration (level, format)."""

    level: str
    format: str  # noqa: A003


def _build_logging(data: dict | None) -> LoggingSettings:
    d = data or {}
    return LoggingSettings(
        level=d.get("level", "INFO"),
        format=d.get("format", "json"),
    )


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ModkitSettings:
    """Root of the typed settings tree."""

    server: ServerSettings
    api: ApiSettings
    auth: AuthSettings
    logging: LoggingSettings


def build_settings(data: dict) -> ModkitSettings:
    """Build the full typed settings tree from raw config data.

    Called once during :class:`ModkitConfig` initialization after
    environment-variable resolution and validation.
    """
    return ModkitSettings(
        server=_build_server(data.get("server")),
        api=_build_api(data.get("api")),
        auth=_build_auth(data.get("auth")),
        logging=_build_logging(data.get("logging")),
    )
