"""
Plugin initialization for Aurawatch.

This module imports all built-in plugins to register them with the registry.
Import this module to ensure all plugins are available.
"""

# Import all plugin modules to trigger registration decorators
# pylint: disable=unused-import
# ruff: noqa: F401
from aurawatch import classifiers, notifiers

# Re-export registry functions for convenience
from aurawatch.registry import (
    create_classifier,
    create_notifier,
    get_registry,
)

__all__ = [
    "create_classifier",
    "create_notifier",
    "get_registry",
]
