"""Plugin registry system for extensible components.

Allows users to register custom RHS models without modifying library
source code; the sweep driver resolves models by registry key.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from primal_sweep.exceptions import RegistryError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Registry:
    """Registry for plugin components.

    Example:
        >>> MODEL_REGISTRY = Registry("models")
        >>> @MODEL_REGISTRY.register("my_model")
        ... class MyModel(AbstractModel):
        ...     pass
        >>> model_cls = MODEL_REGISTRY.get("my_model")
    """

    def __init__(self, name: str):
        """Initialize registry.

        Args:
            name: Registry name for error messages.
        """
        self.name = name
        self._registry: dict[str, type[Any]] = {}
        logger.debug(f"Initialized {name} registry")

    def register(self, key: str) -> Callable[[type[T]], type[T]]:
        """Decorator to register a class.

        Args:
            key: Unique identifier for this component.

        Returns:
            Decorator function.
        """

        def decorator(cls: type[T]) -> type[T]:
            if key in self._registry:
                logger.warning(f"Overwriting existing {self.name} registry entry: {key}")
            self._registry[key] = cls
            logger.debug(f"Registered {self.name}: {key} -> {cls.__name__}")
            return cls

        return decorator

    def get(self, key: str) -> type[Any]:
        """Retrieve a registered class.

        Args:
            key: Component identifier.

        Returns:
            Registered class.

        Raises:
            RegistryError: If key not found in registry.
        """
        if key not in self._registry:
            available = ", ".join(self.list_keys())
            raise RegistryError(
                f"'{key}' not found in {self.name} registry. Available: {available}"
            )
        return self._registry[key]

    def list_keys(self) -> list[str]:
        """List all registered keys.

        Returns:
            Sorted list of registered keys.
        """
        return sorted(self._registry.keys())

    def __contains__(self, key: str) -> bool:
        """Check if key is registered."""
        return key in self._registry

    def __len__(self) -> int:
        return len(self._registry)

    def __repr__(self) -> str:
        """String representation."""
        keys = ", ".join(self.list_keys())
        return f"Registry('{self.name}', keys=[{keys}])"


# Global registries
MODEL_REGISTRY = Registry("models")


__all__ = ["Registry", "MODEL_REGISTRY"]
