"""
Coefficient Control Panel
"""
from __future__ import annotations

import logging

from PySide6.QtCore import Signal, Qt
from PySide6.QtWidgets import QWidget, QHBoxLayout, QVBoxLayout, QGridLayout, QLabel, QLineEdit, QGroupBox

from conicexplorer.config import QUADRATIC_COLOR, LINEAR_COLOR, CONSTANT_COLOR
from conicexplorer.model.coefficients import COEFFICIENT_NAMES, FieldBuffer
from conicexplorer.model.state import ProjectState

logger = logging.getLogger(__name__)

# name -> (letter, subscript, colour)
FIELD_LABELS = {
    "a11": ("a", "11", QUADRATIC_COLOR),
    "a12": ("a", "12", QUADRATIC_COLOR),
    "a22": ("a", "22", QUADRATIC_COLOR),
    "b1": ("b", "1", LINEAR_COLOR),
    "b2": ("b", "2", LINEAR_COLOR),
    "c": ("c", "", CONSTANT_COLOR),
}


def _symbol_html(name: str) -> str:
    letter, sub, color = FIELD_LABELS[name]
    return f'<span style="color:{color}"><i>{letter}</i><sub>{sub}</sub></span>'


EQUATION_HTML = (
    f"<i>{_symbol_html('a11')}x² + {_symbol_html('a12')}xy + {_symbol_html('a22')}y² + "
    f"{_symbol_html('b1')}x + {_symbol_html('b2')}y + {_symbol_html('c')} = 0</i>"
)


class CoefficientField(QWidget):
    """Free-form decimal text field for one coefficient."""
    value_edited = Signal(str, float)

    def __init__(self, name: str, value: float, parent=None) -> None:
        super().__init__(parent)
        self.name = name
        self.buffer = FieldBuffer(value)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        label = QLabel(_symbol_html(name))
        label.setTextFormat(Qt.RichText)
        layout.addWidget(label)

        self.edit = QLineEdit(self.buffer.text)
        self.edit.setAlignment(Qt.AlignRight)
        self.edit.textEdited.connect(self.on_text_edited)
        self.edit.editingFinished.connect(self.on_editing_finished)
        layout.addWidget(self.edit, 1)

    def on_text_edited(self, text: str) -> None:
        value = self.buffer.edit(text)
        if value is not None:
            self.value_edited.emit(self.name, value)

    def on_editing_finished(self) -> None:
        value = self.buffer.commit()
        if value is None:
            logger.debug("Reverted %s to %s", self.name, self.buffer.text)
        self._show_buffer()
        if value is not None:
            self.value_edited.emit(self.name, value)

    def set_value(self, value: float) -> None:
        """Follow the model without clobbering equivalent text being typed."""
        if self.buffer.sync(value):
            self._show_buffer()

    def _show_buffer(self) -> None:
        if self.edit.text() != self.buffer.text:
            self.edit.setText(self.buffer.text)


class CoefficientControlPanel(QWidget):
    # Emitted after the coefficient snapshot in the project state changed
    data_changed = Signal()

    def __init__(self, project_state: ProjectState) -> None:
        super().__init__()
        self.project = project_state

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        title = QLabel("Conic Explorer")
        title.setStyleSheet("font-size: 18px; font-weight: bold;")
        layout.addWidget(title)

        equation = QLabel(EQUATION_HTML)
        equation.setTextFormat(Qt.RichText)
        equation.setWordWrap(True)
        layout.addWidget(equation)

        grp = QGroupBox("Coefficients")
        grid = QGridLayout(grp)
        self.fields: dict[str, CoefficientField] = {}
        # Quadratic part on the first row, linear part and constant on the second
        for i, name in enumerate(COEFFICIENT_NAMES):
            field = CoefficientField(name, getattr(self.project.coefficients, name))
            field.value_edited.connect(self.on_value_edited)
            grid.addWidget(field, i // 3, i % 3)
            self.fields[name] = field
        layout.addWidget(grp)

    def on_value_edited(self, name: str, value: float) -> None:
        if self.project.set_coefficient(name, value):
            self.data_changed.emit()

    def load_from_state(self) -> None:
        for name, field in self.fields.items():
            field.set_value(getattr(self.project.coefficients, name))
