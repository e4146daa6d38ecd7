"""
Main Application Window
=======================
The primary GUI container: control panels on the left, the graph on the right.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects `data_changed` of the coefficient panel to a full,
   synchronous recomputation of the analysis panel and the graph.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QSplitter, QScrollArea

from conicexplorer.controller.explanation import ExplanationClient
from conicexplorer.model.state import ProjectState
from conicexplorer.view.panels.analysis_panel import AnalysisPanel
from conicexplorer.view.panels.coefficient_panel import CoefficientControlPanel
from conicexplorer.view.panels.explanation_panel import ExplanationPanel
from conicexplorer.view.widgets.graph_canvas import GraphCanvas

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Conic Explorer"


class MainWindow(QMainWindow):
    def __init__(self, project_state: ProjectState, explanation_client: ExplanationClient) -> None:
        super().__init__()
        self.project: ProjectState = project_state

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        # --- LEFT SIDE: Controls, analysis and explanation ---
        sidebar = QWidget()
        sidebar_layout = QVBoxLayout(sidebar)

        self.coef_panel = CoefficientControlPanel(self.project)
        self.analysis_panel = AnalysisPanel()
        self.explanation_panel = ExplanationPanel(self.project, explanation_client)

        sidebar_layout.addWidget(self.coef_panel)
        sidebar_layout.addWidget(self.analysis_panel)
        sidebar_layout.addWidget(self.explanation_panel, 1)

        scroller = QScrollArea()
        scroller.setWidget(sidebar)
        scroller.setWidgetResizable(True)
        splitter.addWidget(scroller)

        # --- RIGHT SIDE: Graph ---
        self.canvas = GraphCanvas()
        splitter.addWidget(self.canvas)

        # Initial proportions (sidebar : graph)
        splitter.setSizes([360, 1040])
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)

        # --- SIGNAL CONNECTIONS ---
        self.coef_panel.data_changed.connect(self.on_data_changed)

        self._create_actions()
        self._create_menus()

        # Initial Render
        self.update_visualization()

    def _create_actions(self) -> None:
        self.act_reset = QAction("Reset Coefficients", self)
        self.act_reset.setShortcut("Ctrl+R")
        self.act_reset.triggered.connect(self.on_reset)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

    def _create_menus(self) -> None:
        file_menu = self.menuBar().addMenu("&File")
        file_menu.addAction(self.act_reset)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

    def on_data_changed(self) -> None:
        """Slot called when the coefficient snapshot changes."""
        self.update_visualization()

    def on_reset(self) -> None:
        self.project.reset()
        self.coef_panel.load_from_state()
        self.explanation_panel.load_from_state()
        self.update_visualization()

    def update_visualization(self) -> None:
        """Recompute everything from the current snapshot."""
        report = self.project.report()
        logger.debug("%s: %s", report.coefficients.equation(), report.kind.value)
        self.analysis_panel.update_report(report)
        self.canvas.set_coefficients(report.coefficients)

    def closeEvent(self, event) -> None:
        self.explanation_panel.shutdown()
        super().closeEvent(event)
