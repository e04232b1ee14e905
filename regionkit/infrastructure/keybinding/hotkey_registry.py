# regionkit/infrastructure/keybinding/hotkey_registry.py
"""
In-memory keybinding registry.

Bindings are kept in registration order and dispatched by name. The Qt
registry builds on this class and only adds the shortcut objects.
"""
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from regionkit.domain.services.i_keybinding_registry import IKeybindingRegistry
from regionkit.domain.services.i_logger_service import ILoggerService


@dataclass
class Binding:
    name: str
    callback: Callable[[], None]
    description: Optional[str] = None


class HotkeyRegistry(IKeybindingRegistry):
    """Keybinding registry that dispatches by key name."""

    def __init__(self, logger: ILoggerService):
        self.logger = logger
        self._bindings: "OrderedDict[str, Binding]" = OrderedDict()

    def add_key(self, name: str, callback: Callable[[], None], description: Optional[str] = None) -> None:
        if name in self._bindings:
            self._release(self._bindings.pop(name))
        binding = Binding(name, callback, description)
        self._bindings[name] = binding
        self._bind(binding)

    def remove_key(self, name: str) -> None:
        binding = self._bindings.pop(name, None)
        if binding is not None:
            self._release(binding)

    def get_keys(self) -> List[str]:
        return list(self._bindings.keys())

    def descriptions(self) -> Dict[str, str]:
        """Documented bindings, as listed on a settings page."""
        return {b.name: b.description for b in self._bindings.values() if b.description}

    def trigger(self, name: str) -> bool:
        """
        Run the callback bound to name.

        Returns:
            False if nothing is bound to name
        """
        binding = self._bindings.get(name)
        if binding is None:
            self.logger.debug("No binding for key", key=name)
            return False
        binding.callback()
        return True

    def _bind(self, binding: Binding) -> None:
        pass

    def _release(self, binding: Binding) -> None:
        pass
