"""modkit: compose feature modules into a Flask host.

Public API::

    from modkit import Module, ModuleRegistry, RouterGroups, create_app
"""

__version__ = "0.1.0"

from modkit.app import HostApp, create_app
from modkit.modules import Module, ModuleRegistry, ModuleWithChildren, RouterGroups

__all__ = [
    "HostApp",
    "Module",
    "ModuleRegistry",
    "ModuleWithChildren",
    "RouterGroups",
    "__version__",
    "create_app",
]
