"""
Shared test fixtures.

A single offscreen QApplication is created for the session so Qt signals and
shortcut objects work without a display.
"""
import logging
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from regionkit.application.annotation import Annotation
from regionkit.domain.models.region_model import Region
from regionkit.infrastructure.keybinding.hotkey_registry import HotkeyRegistry
from regionkit.infrastructure.logging.logger_service import ConsoleLoggerService


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def logger():
    return ConsoleLoggerService(level=logging.WARNING, name="regionkit.tests")


@pytest.fixture
def registry(logger):
    return HotkeyRegistry(logger)


@pytest.fixture
def entity_events():
    """Records (event, region id) pairs from the entity hooks."""
    return []


@pytest.fixture
def annotation(registry, logger, entity_events):
    return Annotation(
        registry=registry,
        logger=logger,
        annotation_id="ann-1",
        entity_created=lambda r: entity_events.append(("create", r.id)),
        entity_deleted=lambda r: entity_events.append(("delete", r.id)),
    )


@pytest.fixture
def store(annotation):
    return annotation.region_store


@pytest.fixture
def add_regions(store):
    """Add regions built from (id, x, score) triples to the store and return them."""
    def add(specs):
        return [
            store.add_region(Region(id=region_id, x=x, y=10, width=20, height=30, score=score))
            for region_id, x, score in specs
        ]
    return add
