"""
Plugin registry and factory system for Aurawatch.

This module provides a centralized registry for all plugin types and
factory functions to instantiate them from configuration.
"""

import importlib
import inspect
import pkgutil
from collections.abc import Callable, Iterable
from typing import Any

from aurawatch.core import Classifier, Notifier
from aurawatch.logging_config import get_logger

logger = get_logger(__name__)


class PluginRegistry:
    """
    Central registry for all plugin types.

    Each category (classifiers, notifiers) maintains a mapping of type
    names to implementation classes.
    """

    def __init__(self) -> None:
        self._classifiers: dict[str, type[Classifier]] = {}
        self._notifiers: dict[str, type[Notifier]] = {}

    # Classifier registration
    def register_classifier(self, type_name: str, cls: type[Classifier]) -> None:
        """Register a classifier implementation."""
        self._classifiers[type_name] = cls

    def get_classifier(self, type_name: str) -> type[Classifier]:
        """Get a classifier class by type name."""
        if type_name not in self._classifiers:
            raise ValueError(f"Unknown classifier type: {type_name}")
        return self._classifiers[type_name]

    # Notifier registration
    def register_notifier(self, type_name: str, cls: type[Notifier]) -> None:
        """Register a notifier implementation."""
        self._notifiers[type_name] = cls

    def get_notifier(self, type_name: str) -> type[Notifier]:
        """Get a notifier class by type name."""
        if type_name not in self._notifiers:
            raise ValueError(f"Unknown notifier type: {type_name}")
        return self._notifiers[type_name]

    def list_plugins(self) -> dict[str, list[str]]:
        """List all registered plugins by category."""
        return {
            "classifiers": list(self._classifiers.keys()),
            "notifiers": list(self._notifiers.keys()),
        }


# Global registry instance
_registry = PluginRegistry()


# Factory functions
def create_classifier(
    type_name: str,
    config: dict[str, Any],
    lookup: Callable[[str], Any] | None = None
) -> Classifier:
    """Create a classifier instance from configuration."""
    cls = _registry.get_classifier(type_name)
    return cls(config, lookup)


def create_notifier(type_name: str, config: dict[str, Any]) -> Notifier:
    """Create a notifier instance from configuration."""
    cls = _registry.get_notifier(type_name)
    return cls(config)


# Decorators for easy registration
def register_classifier(type_name: str) -> Callable[[type[Classifier]], type[Classifier]]:
    """Decorator to register a classifier class."""
    def decorator(cls: type[Classifier]) -> type[Classifier]:
        cls.type_name = type_name
        _registry.register_classifier(type_name, cls)
        return cls
    return decorator


def register_notifier(type_name: str) -> Callable[[type[Notifier]], type[Notifier]]:
    """Decorator to register a notifier class."""
    def decorator(cls: type[Notifier]) -> type[Notifier]:
        _registry.register_notifier(type_name, cls)
        return cls
    return decorator


def get_registry() -> PluginRegistry:
    """Get the global plugin registry."""
    return _registry


def discover_plugins(package: str, path: Iterable[str], base: type) -> dict[str, type]:
    """
    Import every module of a plugin package and collect its exports.

    Importing a module runs its ``register_*`` decorators. Names listed in
    a module's ``__all__`` are returned when they are ``base`` subclasses;
    anything else, and names already exported by an earlier module, are
    skipped with a warning.

    Args:
        package: Dotted name of the plugin package
        path: The package's ``__path__``
        base: Class every export must derive from

    Returns:
        Mapping of export name to class, in module order
    """
    exports: dict[str, type] = {}

    for module_info in pkgutil.iter_modules(path):
        module = importlib.import_module(f"{package}.{module_info.name}")

        for name in getattr(module, "__all__", ()):
            if name in exports:
                logger.warning(
                    "Duplicate plugin name '%s' in module '%s' - skipping",
                    name, module_info.name
                )
                continue

            cls = getattr(module, name)
            if not inspect.isclass(cls) or not issubclass(cls, base):
                logger.warning(
                    "Export '%s' in module '%s' is not a %s subclass - skipping",
                    name, module_info.name, base.__name__
                )
                continue

            exports[name] = cls

    return exports
