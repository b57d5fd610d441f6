"""Duration picker: one full-width button per catalog entry."""

from __future__ import annotations

from typing import Iterable

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QPushButton

from ..timer.selection import DurationChoice


class SelectionPanel(QWidget):
    """Emits ``choice_selected(DurationChoice)`` when a button is clicked."""

    choice_selected = pyqtSignal(object)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(10, 10, 10, 10)
        self._layout.setSpacing(20)
        self._buttons: dict[str, QPushButton] = {}
        self._choices: list[DurationChoice] = []

    @property
    def buttons(self) -> dict[str, QPushButton]:
        return self._buttons

    @property
    def choices(self) -> list[DurationChoice]:
        return list(self._choices)

    def set_choices(self, catalog: Iterable[DurationChoice]) -> None:
        """Rebuild the buttons (no-op when the catalog is unchanged)."""
        catalog = list(catalog)
        if catalog == self._choices:
            return
        while self._layout.count():
            item = self._layout.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()
        self._buttons.clear()
        self._choices = catalog

        for choice in catalog:
            btn = QPushButton(choice.label, self)
            btn.setObjectName("durationButton")
            btn.clicked.connect(
                lambda _checked=False, c=choice: self.choice_selected.emit(c)
            )
            self._buttons[choice.label] = btn
            self._layout.addWidget(btn)
        self._layout.addStretch(1)
