# regionkit/infrastructure/ui/qt_hotkey_registry.py

from typing import Dict

from PySide6.QtCore import Qt, QObject
from PySide6.QtGui import QKeySequence, QShortcut

from regionkit.domain.services.i_logger_service import ILoggerService
from regionkit.infrastructure.keybinding.hotkey_registry import HotkeyRegistry, Binding


# Key names that differ between the registry and Qt's portable text format
_QT_KEY_NAMES = {
    "ctrl": "Ctrl",
    "alt": "Alt",
    "shift": "Shift",
    "meta": "Meta",
    "enter": "Return",
    "escape": "Esc",
    "backspace": "Backspace",
    "tab": "Tab",
    "space": "Space",
    "up": "Up",
    "down": "Down",
    "left": "Left",
    "right": "Right",
}


def to_key_sequence_text(name: str) -> str:
    """Translate "ctrl+up" into Qt's "Ctrl+Up"."""
    parts = [p.strip().lower() for p in name.split("+")]
    return "+".join(_QT_KEY_NAMES.get(p, p.upper()) for p in parts)


class QtHotkeyRegistry(HotkeyRegistry):
    """
    Keybinding registry backed by QShortcut objects on a widget.

    Placeholder names such as "alt+shift+$n" are documentation entries only and
    never get a shortcut.
    """

    def __init__(self, parent: QObject, logger: ILoggerService):
        super().__init__(logger)
        self._parent = parent
        self._shortcuts: Dict[str, QShortcut] = {}

    def shortcut(self, name: str):
        return self._shortcuts.get(name)

    def _bind(self, binding: Binding) -> None:
        if "$" in binding.name:
            return

        sequence = QKeySequence.fromString(to_key_sequence_text(binding.name), QKeySequence.SequenceFormat.PortableText)
        if sequence.isEmpty():
            self.logger.warning("Key name has no Qt equivalent", key=binding.name)
            return

        shortcut = QShortcut(sequence, self._parent)
        shortcut.setContext(Qt.ShortcutContext.WindowShortcut)
        if binding.description:
            shortcut.setWhatsThis(binding.description)
        shortcut.activated.connect(binding.callback)
        self._shortcuts[binding.name] = shortcut

    def _release(self, binding: Binding) -> None:
        shortcut = self._shortcuts.pop(binding.name, None)
        if shortcut is None:
            return
        shortcut.setEnabled(False)
        shortcut.activated.disconnect()
        shortcut.setParent(None)
        shortcut.deleteLater()
