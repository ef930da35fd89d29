"""Logging subsystem for modkit.

Public API::

    from modkit.logging import configure_logging

    configure_logging(settings.logging)
"""

from modkit.logging.setup import configure_logging

__all__ = ["configure_logging"]
