"""modkit configuration loader.

Lifecycle::

    # 1. The entry point creates the configuration (once, at startup)
    ModkitConfig(config_file="/etc/modkit/config.yaml")

    # 2. Any module retrieves it afterwards
    from modkit.config import get_config
    cfg = get_config()
    cfg.settings.api.base_path  # typed access

    # 3. Dynamic access for module-specific sections
    cfg.get("modules.billing.currency", default="EUR")
"""

from __future__ import annotations

import copy
import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

from modkit.config.settings import ModkitSettings, build_settings

_ENV_RE = re.compile(
    r"^\$\{([^}:]+?)(?::-(.*))?\}$",
    re.DOTALL,
)

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
_LOG_FORMATS = frozenset({"json", "text"})
_MIN_TOKEN_SECRET_LENGTH = 16

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Module-level singleton reference
# ---------------------------------------------------------------------------
_instance: ModkitConfig | None = None


def get_config() -> ModkitConfig:
    """Return the most recently created configuration.

    Raises :class:`RuntimeError` if :class:`ModkitConfig` has not been
    created yet.
    """
    if _instance is None:
        msg = (
            "Configuration not initialised. "
            "ModkitConfig must be created before calling get_config()."
        )
        raise RuntimeError(msg)
    return _instance


# ---------------------------------------------------------------------------
# Validation error collector
# ---------------------------------------------------------------------------


class ConfigValidationError(Exception):
    """Raised when validation finds one or more problems."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        body = "\n".join(f"  - {e}" for e in errors)
        super().__init__(f"Configuration validation failed:\n{body}")


# ---------------------------------------------------------------------------
# Environment variable resolution
# ---------------------------------------------------------------------------


def _resolve_value(value: str, path: str) -> str:
    """Replace ``${VAR}`` or ``${VAR:-default}`` with env var value."""
    match = _ENV_RE.match(value)
    if match is None:
        return value
    var_name = match.group(1)
    fallback = match.group(2)
    resolved = os.environ.get(var_name)
    if resolved is not None:
        return resolved
    if fallback is not None:
        return fallback
    raise ConfigValidationError(
        [
            f"Environment variable '${{{var_name}}}' referenced "
            f"at '{path}' is not set and has no default",
        ],
    )


def _resolve_env_vars(
    data: Any,  # noqa: ANN401
    path: str = "",
) -> None:
    """Walk *data* in-place and resolve ``${VAR}``/``${VAR:-default}`` strings."""
    if isinstance(data, dict):
        for key in data:
            child_path = f"{path}.{key}" if path else key
            if isinstance(data[key], str):
                data[key] = _resolve_value(data[key], child_path)
            elif isinstance(data[key], (dict, list)):
                _resolve_env_vars(data[key], child_path)
    elif isinstance(data, list):
        for idx, item in enumerate(data):
            child_path = f"{path}[{idx}]"
            if isinstance(item, str):
                data[idx] = _resolve_value(item, child_path)
            elif isinstance(item, (dict, list)):
                _resolve_env_vars(item, child_path)


def _section(data: dict[str, Any], name: str, errors: list[str]) -> dict[str, Any]:
    """Return the *name* mapping of *data*, recording an error if it is not one."""
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        errors.append(
            f"{name} must be a mapping (got {type(section).__name__})",
        )
        return {}
    return section


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ModkitConfig:
    """Central configuration for a modkit host.

    Exactly one of *config_file* (YAML) or *data* (an already parsed
    mapping) is given.  After construction the typed settings tree is
    available at :pyattr:`settings` and the raw dict via
    :pyattr:`data` / :pymeth:`get`.
    """

    def __init__(
        self,
        *,
        config_file: str | Path | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        global _instance  # noqa: PLW0603

        if (config_file is None) == (data is None):
            msg = "Exactly one of config_file= or data= must be given"
            raise ValueError(msg)

        self._config_file = Path(config_file) if config_file is not None else None
        if self._config_file is not None:
            self._data = self._read(self._config_file)
        else:
            self._data = copy.deepcopy(data)

        _resolve_env_vars(self._data)
        self.additional_checks()

        self._settings: ModkitSettings = build_settings(self._data)
        _instance = self
        log.debug(
            "Configuration loaded from %s",
            self._config_file or "mapping",
        )

    @classmethod
    def reset(cls) -> None:
        """Forget the current configuration (used by tests)."""
        global _instance  # noqa: PLW0603
        _instance = None

    @staticmethod
    def _read(path: Path) -> dict[str, Any]:
        try:
            with path.open(encoding="utf-8") as fh:
                loaded = yaml.safe_load(fh)
        except OSError as exc:
            raise ConfigValidationError(
                [f"Cannot read config file '{path}': {exc}"],
            ) from exc
        except yaml.YAMLError as exc:
            raise ConfigValidationError(
                [f"Config file '{path}' is not valid YAML: {exc}"],
            ) from exc
        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise ConfigValidationError(
                [f"Config file '{path}' must contain a mapping at the top level"],
            )
        return loaded

    # -- access ------------------------------------------------------------

    @property
    def data(self) -> dict[str, Any]:
        return self._data

    @property
    def settings(self) -> ModkitSettings:
        """Fully-typed, frozen settings tree."""
        return self._settings

    def get(self, path: str, default: Any = None) -> Any:  # noqa: ANN401
        """Return the raw value at dotted *path*, or *default*."""
        node: Any = self._data
        for part in path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    # -- validation --------------------------------------------------------

    def additional_checks(self) -> None:
        """Semantic & cross-field validation of the raw data."""
        errors: list[str] = []

        api = _section(self._data, "api", errors)
        auth = _section(self._data, "auth", errors)
        logging_cfg = _section(self._data, "logging", errors)
        server = _section(self._data, "server", errors)

        base_path = api.get("base_path", "/api")
        if not isinstance(base_path, str):
            errors.append("api.base_path must be a string")
        elif base_path and not base_path.startswith("/"):
            errors.append(
                f"api.base_path must start with '/' (got '{base_path}')",
            )

        secret = auth.get("token_secret", "")
        if not isinstance(secret, str):
            errors.append("auth.token_secret must be a string")
        elif len(secret) < _MIN_TOKEN_SECRET_LENGTH:
            errors.append(
                f"auth.token_secret must be at least {_MIN_TOKEN_SECRET_LENGTH} "
                "characters long",
            )

        expiry = auth.get("token_expiry_seconds", 1209600)
        if not isinstance(expiry, int) or expiry <= 0:
            errors.append("auth.token_expiry_seconds must be a positive integer")

        level = str(logging_cfg.get("level", "INFO")).upper()
        if level not in _LOG_LEVELS:
            errors.append(
                f"logging.level '{level}' is not one of {sorted(_LOG_LEVELS)}",
            )

        fmt = logging_cfg.get("format", "json")
        if not isinstance(fmt, str) or fmt not in _LOG_FORMATS:
            errors.append(
                f"logging.format '{fmt}' is not one of {sorted(_LOG_FORMATS)}",
            )

        port = server.get("port", 8090)
        if not isinstance(port, int) or not 0 < port < 65536:
            errors.append(f"server.port must be between 1 and 65535 (got {port!r})")

        if errors:
            raise ConfigValidationError(errors)
