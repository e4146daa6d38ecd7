"""
Analysis Panel
==============
Shows the rotation matrix R, the translation vector T and the kind of the
curve, so that (x, y)^T = R (x', y')^T + T.
"""
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QVBoxLayout, QGridLayout, QLabel, QGroupBox, QFormLayout

from conicexplorer.model.report import AnalysisReport, format_number

MONO_STYLE = "font-family: monospace; font-size: 13px;"
ROTATION_STYLE = MONO_STYLE + " color: #2563eb;"
TRANSLATION_STYLE = MONO_STYLE + " color: #16a34a;"
UNDEFINED_STYLE = MONO_STYLE + " color: #d97706;"
KIND_STYLE = "font-weight: bold;"
NO_POINTS_STYLE = "font-weight: bold; color: gray;"


class AnalysisPanel(QWidget):
    def __init__(self, parent=None) -> None:
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        grp = QGroupBox("Analysis")
        form = QFormLayout(grp)

        self.lbl_kind = QLabel("")
        form.addRow("Curve:", self.lbl_kind)

        # --- Rotation matrix ---
        self.lbl_rotation = QLabel("")
        form.addRow("Rotation:", self.lbl_rotation)

        matrix = QWidget()
        grid = QGridLayout(matrix)
        grid.setContentsMargins(0, 0, 0, 0)
        self.rotation_cells = [[QLabel(""), QLabel("")], [QLabel(""), QLabel("")]]
        for r, row in enumerate(self.rotation_cells):
            for c, cell in enumerate(row):
                cell.setAlignment(Qt.AlignCenter)
                cell.setStyleSheet(ROTATION_STYLE)
                cell.setMinimumWidth(60)
                grid.addWidget(cell, r, c)
        form.addRow("R =", matrix)

        # --- Translation vector ---
        self.lbl_translation_title = QLabel("Center")
        self.lbl_translation = QLabel("")
        self.lbl_translation.setAlignment(Qt.AlignCenter)
        form.addRow(self.lbl_translation_title, self.lbl_translation)

        formula = QLabel("<i>(x,y)<sup>T</sup></i> = <b>R</b> <i>(x',y')<sup>T</sup></i> + <b>T</b>")
        formula.setTextFormat(Qt.RichText)
        formula.setAlignment(Qt.AlignCenter)
        formula.setStyleSheet("color: gray;")
        form.addRow(formula)

        layout.addWidget(grp)

    def update_report(self, report: AnalysisReport) -> None:
        geometry = report.geometry

        # Imaginary and empty kinds draw nothing
        self.lbl_kind.setText(report.kind.value)
        self.lbl_kind.setStyleSheet(KIND_STYLE if report.kind.has_real_points else NO_POINTS_STYLE)
        self.lbl_rotation.setText(f"{format_number(geometry.angle_degrees)}°")

        for row_cells, row_text in zip(self.rotation_cells, report.rotation_cells()):
            for cell, text in zip(row_cells, row_text):
                cell.setText(text)

        # "T =" column vector, or the undefined marker
        self.lbl_translation_title.setText(f"T ({geometry.translation_label}) =")
        cells = report.translation_cells()
        if cells is None:
            self.lbl_translation.setText("Undefined")
            self.lbl_translation.setStyleSheet(UNDEFINED_STYLE)
        else:
            self.lbl_translation.setText(f"{cells[0]}\n{cells[1]}")
            self.lbl_translation.setStyleSheet(TRANSLATION_STYLE)
