"""
Built-in classifiers for Aurawatch.

Every module in this package is imported along with the package so that its
``@register_classifier`` decorator runs; exported classes are re-exported here.
"""

from aurawatch.core import Classifier
from aurawatch.registry import discover_plugins

_exports = discover_plugins(__name__, __path__, Classifier)
globals().update(_exports)
__all__ = list(_exports)
