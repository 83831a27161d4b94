"""Host-defined toggle buttons for the configuration bar."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QToolButton, QWidget


@dataclass(frozen=True, slots=True)
class CustomToggle:
    """A named toggle with an icon, a tooltip and a state callback.

    The configuration bar creates one checkable button per toggle, in the
    order the host supplies them.
    """

    label: str
    tooltip: str
    on_selected: Callable[[bool], None]
    icon_path: Path | None = None
    checked: bool = False


def create_toggle_button(*, parent: QWidget, toggle: CustomToggle) -> QToolButton:
    """Create a checkable tool button wired to the toggle's callback."""

    button = QToolButton(parent)
    button.setCheckable(True)
    button.setChecked(toggle.checked)
    button.setToolTip(toggle.tooltip)
    if toggle.icon_path is not None and toggle.icon_path.exists():
        button.setIcon(QIcon(str(toggle.icon_path)))
    else:
        button.setText(toggle.label)
    button.toggled.connect(toggle.on_selected)
    return button
