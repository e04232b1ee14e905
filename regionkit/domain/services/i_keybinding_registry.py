# regionkit/domain/services/i_keybinding_registry.py
from abc import ABC, abstractmethod
from typing import Callable, List, Optional


class IKeybindingRegistry(ABC):
    """Named key combinations bound to callbacks."""

    @abstractmethod
    def add_key(self, name: str, callback: Callable[[], None], description: Optional[str] = None) -> None:
        """Bind name (e.g. "alt+shift+1") to callback, replacing any previous binding."""
        pass

    @abstractmethod
    def remove_key(self, name: str) -> None:
        """Release the binding for name. Unknown names are ignored."""
        pass

    @abstractmethod
    def get_keys(self) -> List[str]:
        """Names of all current bindings, in registration order."""
        pass
