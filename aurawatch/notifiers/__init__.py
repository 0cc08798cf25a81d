"""
Built-in notifiers for Aurawatch.

Every module in this package is imported along with the package so that its
``@register_notifier`` decorator runs; exported classes are re-exported here.
"""

from aurawatch.core import Notifier
from aurawatch.registry import discover_plugins

_exports = discover_plugins(__name__, __path__, Notifier)
globals().update(_exports)
__all__ = list(_exports)
