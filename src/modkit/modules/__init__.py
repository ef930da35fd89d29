"""Module tree composition.

Public API::

    from modkit.modules import Module, ModuleRegistry, RouterGroups
"""

from modkit.modules.base import Module, ModuleWithChildren, children_of
from modkit.modules.groups import RouterGroups
from modkit.modules.registry import ModuleRegistry, RegistryState, RegistryStateError

__all__ = [
    "Module",
    "ModuleRegistry",
    "ModuleWithChildren",
    "RegistryState",
    "RegistryStateError",
    "RouterGroups",
    "children_of",
]
