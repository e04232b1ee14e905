#regionkit/domain/common/di_container.py

"""
Dependency injection container for the annotation application.

Services are registered against their interface type and resolved lazily,
so tests can swap the keybinding registry or the config repository without
touching the wiring code.
"""
from typing import Dict, Any, Type, TypeVar, Callable, Set


T = TypeVar('T')


class DIContainer:
    """
    Registry of service instances and lazily built singletons keyed by interface type.
    """

    def __init__(self):
        self._instances: Dict[type, Any] = {}
        self._factories: Dict[type, Callable[[], Any]] = {}
        self._resolving: Set[type] = set()

    def register_instance(self, base_type: Type[T], instance: T) -> None:
        """
        Always resolve base_type to the given instance.

        Args:
            base_type: The interface type
            instance: The instance to return
        """
        self._instances[base_type] = instance

    def register_singleton(self, base_type: Type[T], factory: Callable[[], T]) -> None:
        """
        Build the instance on first resolution and reuse it afterwards.

        Args:
            base_type: The interface type
            factory: Zero-argument callable creating the instance
        """
        self._factories[base_type] = factory

    def resolve(self, base_type: Type[T]) -> T:
        """
        Resolve base_type to an instance.

        Raises:
            ValueError: If the type is not registered or resolution is circular
        """
        if base_type in self._instances:
            return self._instances[base_type]

        if base_type not in self._factories:
            raise ValueError(f"No registration found for {base_type.__name__}")

        if base_type in self._resolving:
            raise ValueError(f"Circular dependency detected while resolving {base_type.__name__}")

        self._resolving.add(base_type)
        try:
            instance = self._factories[base_type]()
        finally:
            self._resolving.discard(base_type)

        self._instances[base_type] = instance
        return instance
