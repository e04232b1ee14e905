# regionkit/domain/services/i_config_repository_service.py
"""
Configuration repository interface for annotation settings.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Any, Callable

from regionkit.domain.common.result import Result


@dataclass
class RegionStoreSettings:
    """Settings a RegionStore is created with."""
    hotkey_prefix: str = "alt+shift+"
    shift_color: str = "#FF0000"
    default_sort: str = "date"
    default_sort_order: str = "desc"
    default_group: str = "type"


class IConfigRepository(ABC):
    """
    Interface for configuration repository.

    Defines methods for loading, saving, and accessing configuration settings.
    """

    @abstractmethod
    def load_config(self, force_reload: bool = False) -> Result[Dict[str, Any]]:
        """
        Load configuration from storage.

        Args:
            force_reload: Whether to force a reload from storage

        Returns:
            Result containing the configuration dictionary
        """
        pass

    @abstractmethod
    def save_config(self, config: Dict[str, Any]) -> Result[bool]:
        """
        Save configuration to storage.

        Args:
            config: Configuration dictionary

        Returns:
            Result indicating success or failure
        """
        pass

    @abstractmethod
    def get_setting(self, key: str, default: Any = None) -> Any:
        """
        Get a single setting.

        Args:
            key: Setting key
            default: Default value if key not found

        Returns:
            Setting value or default
        """
        pass

    @abstractmethod
    def set_setting(self, key: str, value: Any) -> Result[bool]:
        """
        Set a single setting and persist it.

        Args:
            key: Setting key
            value: Setting value

        Returns:
            Result indicating success or failure
        """
        pass

    @abstractmethod
    def get_region_store_settings(self) -> RegionStoreSettings:
        """Build the settings used to create a RegionStore."""
        pass

    @abstractmethod
    def hotkeys_enabled(self) -> bool:
        """Whether the global annotation hotkeys should be registered."""
        pass

    @abstractmethod
    def register_observer(self, callback: Callable[[], None]) -> None:
        """Call callback after every successful save."""
        pass

    @abstractmethod
    def unregister_observer(self, callback: Callable[[], None]) -> None:
        """Remove a previously registered observer."""
        pass
