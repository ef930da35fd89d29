"""Configuration subsystem for modkit.

Public API::

    from modkit.config import get_config, ModkitConfig

    # At startup:
    ModkitConfig(config_file="config.yaml")

    # Everywhere else:
    cfg = get_config()
    base = cfg.settings.api.base_path      # typed access
    custom = cfg.get("modules.billing")    # dynamic dot-path
"""

from modkit.config.modkit_config import (
    ConfigValidationError,
    ModkitConfig,
    get_config,
)
from modkit.config.settings import (
    ApiSettings,
    AuthSettings,
    LoggingSettings,
    ModkitSettings,
    ServerSettings,
    build_settings,
)

__all__ = [
    "ApiSettings",
    "AuthSettings",
    "ConfigValidationError",
    "LoggingSettings",
    "ModkitConfig",
    "ModkitSettings",
    "ServerSettings",
    "build_settings",
    "get_config",
]
