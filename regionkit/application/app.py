#regionkit/application/app.py

import os
import logging
from typing import Optional

from regionkit.domain.common.di_container import DIContainer
from regionkit.domain.services.i_logger_service import ILoggerService
from regionkit.domain.services.i_config_repository_service import IConfigRepository
from regionkit.domain.services.i_keybinding_registry import IKeybindingRegistry

from regionkit.infrastructure.logging.logger_service import ConsoleLoggerService, FileLoggerService
from regionkit.infrastructure.config.json_config_repository import JsonConfigRepository
from regionkit.infrastructure.keybinding.hotkey_registry import HotkeyRegistry
from regionkit.application.annotation_app import AnnotationApp


def initialize_app(config_file: Optional[str] = None,
                   registry: Optional[IKeybindingRegistry] = None,
                   log_level: int = logging.INFO,
                   log_dir: Optional[str] = None) -> DIContainer:
    """
    Wire the annotation services.

    Args:
        config_file: Settings file, defaults to config.json in the working directory
        registry: Keybinding registry to use, e.g. a QtHotkeyRegistry bound to the
            main window; an in-memory HotkeyRegistry otherwise
        log_level: Level of the console logger
        log_dir: When given, log records are also written to a dated file there

    Returns:
        The populated container
    """
    container = DIContainer()

    if log_dir:
        logger = FileLoggerService(level=log_level, log_dir=log_dir)
    else:
        logger = ConsoleLoggerService(level=log_level)
    container.register_instance(ILoggerService, logger)

    if config_file is None:
        config_file = os.path.join(os.getcwd(), "config.json")
    container.register_instance(IConfigRepository, JsonConfigRepository(config_file, logger))

    container.register_instance(IKeybindingRegistry, registry or HotkeyRegistry(logger))

    container.register_singleton(
        AnnotationApp,
        lambda: AnnotationApp(
            registry=container.resolve(IKeybindingRegistry),
            config_repository=container.resolve(IConfigRepository),
            logger=container.resolve(ILoggerService)
        )
    )

    logger.info("Application dependencies initialized")

    return container


_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    global _container
    if _container is None:
        _container = initialize_app()
    return _container
