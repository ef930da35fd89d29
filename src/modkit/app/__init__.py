"""Flask host package for modkit.

Public API::

    from modkit.app import create_app, HostApp
"""

from modkit.app.factory import create_app
from modkit.app.host import HostApp

__all__ = ["HostApp", "create_app"]
