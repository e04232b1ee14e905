#regionkit/infrastructure/config/json_config_repository.py

"""
JSON-based implementation of the configuration repository.

Stores annotation settings (hotkey namespace, overlay color, default sort
modes) in a JSON file on disk.
"""
import os
import json
import threading
from typing import Dict, Any, Callable, List

from regionkit.domain.services.i_config_repository_service import IConfigRepository, RegionStoreSettings
from regionkit.domain.services.i_logger_service import ILoggerService
from regionkit.domain.common.errors import ConfigurationError
from regionkit.domain.common.result import Result
from regionkit.domain.services.i_region_store import SORT_MODES, SORT_ORDERS, GROUP_MODES
from regionkit.domain.services.i_annotation_context import FILTER_TYPES


MODIFIER_KEYS = ("ctrl", "alt", "shift", "meta")


def is_valid_hotkey_prefix(prefix: Any) -> bool:
    """
    A region hotkey prefix is two or more distinct modifiers, each followed by "+".

    Single-modifier prefixes such as "ctrl+" would overlap global bindings
    like "ctrl+up".
    """
    if not isinstance(prefix, str) or not prefix.endswith("+"):
        return False
    parts = prefix[:-1].split("+")
    return len(parts) >= 2 and len(set(parts)) == len(parts) and all(p in MODIFIER_KEYS for p in parts)


class JsonConfigRepository(IConfigRepository):
    """
    JSON-based implementation of the configuration repository.

    Missing keys are filled from DEFAULT_CONFIG and invalid enumerations are
    reset to their defaults; a normalized file is written back.
    """

    DEFAULT_CONFIG = {
        "region_hotkey_prefix": "alt+shift+",
        "shift_color": "#FF0000",
        "default_sort": "date",
        "default_sort_order": "desc",
        "default_group": "type",
        "default_filter_type": "None",
        "enable_hotkeys": True,
        "app_version": "1.0.0"
    }

    def __init__(self, config_file: str, logger: ILoggerService):
        """
        Initialize the repository.

        Args:
            config_file: Path to the JSON configuration file
            logger: Logger service
        """
        self.config_file = config_file
        self.logger = logger
        self._config_cache = None
        self._last_modified = 0.0
        self._lock = threading.RLock()
        self._observers: List[Callable[[], None]] = []

    def load_config(self, force_reload: bool = False) -> Result[Dict[str, Any]]:
        """
        Load configuration from storage.

        Args:
            force_reload: Whether to force a reload from storage

        Returns:
            Result containing the configuration dictionary
        """
        with self._lock:
            if os.path.exists(self.config_file):
                mtime = os.path.getmtime(self.config_file)
                if mtime > self._last_modified:
                    force_reload = True

            if self._config_cache is not None and not force_reload:
                return Result.ok(self._config_cache)

            if not os.path.exists(self.config_file):
                self.logger.warning("Config file not found, writing defaults", path=self.config_file)
                config = dict(self.DEFAULT_CONFIG)
                save_result = self.save_config(config)
                if save_result.is_failure:
                    return Result.fail(save_result.error)
                return Result.ok(config)

            try:
                with open(self.config_file, "r") as f:
                    config = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                error = ConfigurationError(
                    message=f"Error loading config: {e}",
                    details={"path": self.config_file},
                    inner_error=e
                )
                self.logger.error(str(error))
                return Result.fail(error)

            if not isinstance(config, dict):
                return Result.fail(ConfigurationError(
                    message="Config root must be a JSON object",
                    details={"path": self.config_file}
                ))

            self._last_modified = os.path.getmtime(self.config_file)
            self.logger.info(f"Config loaded successfully from {self.config_file}")

            if self._normalize(config):
                save_result = self.save_config(config)
                if save_result.is_failure:
                    return Result.fail(save_result.error)

            self._config_cache = config
            return Result.ok(config)

    def _normalize(self, config: Dict[str, Any]) -> bool:
        """Fill missing keys and reset invalid values. Returns True if config changed."""
        updated = False
        for key, default_value in self.DEFAULT_CONFIG.items():
            if key not in config:
                config[key] = default_value
                updated = True

        for key, allowed in (("default_sort", SORT_MODES),
                             ("default_sort_order", SORT_ORDERS),
                             ("default_group", GROUP_MODES),
                             ("default_filter_type", FILTER_TYPES)):
            if config[key] not in allowed:
                self.logger.warning("Invalid config value reset to default", key=key, value=config[key])
                config[key] = self.DEFAULT_CONFIG[key]
                updated = True

        prefix = config["region_hotkey_prefix"]
        if not is_valid_hotkey_prefix(prefix):
            self.logger.warning("Invalid hotkey prefix reset to default", value=prefix)
            config["region_hotkey_prefix"] = self.DEFAULT_CONFIG["region_hotkey_prefix"]
            updated = True

        if not isinstance(config["enable_hotkeys"], bool):
            config["enable_hotkeys"] = bool(config["enable_hotkeys"])
            updated = True

        return updated

    def save_config(self, config: Dict[str, Any]) -> Result[bool]:
        """
        Save configuration to storage.

        Args:
            config: Configuration dictionary

        Returns:
            Result indicating success or failure
        """
        with self._lock:
            try:
                config_dir = os.path.dirname(self.config_file)
                if config_dir:
                    os.makedirs(config_dir, exist_ok=True)

                # Write to a temporary file, then swap it in
                temp_path = f"{self.config_file}.tmp"
                with open(temp_path, "w") as f:
                    json.dump(config, f, indent=4)
                os.replace(temp_path, self.config_file)
            except OSError as e:
                error = ConfigurationError(
                    message=f"Failed to save config: {e}",
                    details={"path": self.config_file},
                    inner_error=e
                )
                self.logger.error(str(error))
                return Result.fail(error)

            self.logger.info(f"Config saved successfully to {self.config_file}")
            self._config_cache = config
            self._last_modified = os.path.getmtime(self.config_file)

        self._notify_observers()
        return Result.ok(True)

    def get_setting(self, key: str, default: Any = None) -> Any:
        """
        Get a single setting.

        Args:
            key: Setting key
            default: Default value if key not found

        Returns:
            Setting value or default
        """
        config_result = self.load_config()
        if config_result.is_failure:
            self.logger.error(f"Error loading config: {config_result.error}")
            return default
        return config_result.value.get(key, default)

    def set_setting(self, key: str, value: Any) -> Result[bool]:
        """
        Set a single setting and persist it.

        Args:
            key: Setting key
            value: Setting value

        Returns:
            Result indicating success or failure
        """
        with self._lock:
            config_result = self.load_config()
            if config_result.is_failure:
                return Result.fail(config_result.error)

            config = dict(config_result.value)
            config[key] = value
            self._normalize(config)
            return self.save_config(config)

    def get_region_store_settings(self) -> RegionStoreSettings:
        defaults = RegionStoreSettings()
        return RegionStoreSettings(
            hotkey_prefix=self.get_setting("region_hotkey_prefix", defaults.hotkey_prefix),
            shift_color=self.get_setting("shift_color", defaults.shift_color),
            default_sort=self.get_setting("default_sort", defaults.default_sort),
            default_sort_order=self.get_setting("default_sort_order", defaults.default_sort_order),
            default_group=self.get_setting("default_group", defaults.default_group),
        )

    def hotkeys_enabled(self) -> bool:
        return bool(self.get_setting("enable_hotkeys", True))

    def register_observer(self, callback: Callable[[], None]) -> None:
        """
        Register a callback function to be notified of config changes.

        Args:
            callback: Function to call when config changes
        """
        with self._lock:
            if callback not in self._observers:
                self._observers.append(callback)
                self.logger.debug(f"Observer registered: {callback.__qualname__}")

    def unregister_observer(self, callback: Callable[[], None]) -> None:
        """
        Unregister a previously registered observer callback.

        Args:
            callback: Previously registered callback function
        """
        with self._lock:
            if callback in self._observers:
                self._observers.remove(callback)
                self.logger.debug(f"Observer unregistered: {callback.__qualname__}")

    def _notify_observers(self) -> None:
        """Call all registered observer functions."""
        with self._lock:
            observers = self._observers.copy()

        for callback in observers:
            callback()
