"""
Explanation Panel
"""
from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QVBoxLayout, QPushButton, QTextBrowser, QLabel, QGroupBox

from conicexplorer.config import SHUTDOWN_WAIT_MS
from conicexplorer.controller.explanation import ExplanationClient
from conicexplorer.controller.workers import ExplanationWorker
from conicexplorer.model.state import ProjectState

logger = logging.getLogger(__name__)

# Workers still blocked in an HTTP call at shutdown; a running QThread must stay referenced
_detached: list[ExplanationWorker] = []


class ExplanationPanel(QWidget):
    """Button + Markdown view for the remote explanation. One round trip per click."""
    def __init__(self, project_state: ProjectState, client: ExplanationClient, parent=None) -> None:
        super().__init__(parent)
        self.project = project_state
        self.client = client
        self._workers: list[ExplanationWorker] = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        grp = QGroupBox("AI Explanation")
        inner = QVBoxLayout(grp)

        self.btn_explain = QPushButton("Explain this curve")
        self.btn_explain.setMinimumHeight(32)
        self.btn_explain.clicked.connect(self.on_explain_clicked)
        inner.addWidget(self.btn_explain)

        self.lbl_status = QLabel("")
        self.lbl_status.setAlignment(Qt.AlignCenter)
        self.lbl_status.setStyleSheet("color: gray;")
        inner.addWidget(self.lbl_status)

        self.text = QTextBrowser()
        self.text.setOpenExternalLinks(True)
        inner.addWidget(self.text, 1)

        layout.addWidget(grp)
        self.load_from_state()

    def on_explain_clicked(self) -> None:
        worker = ExplanationWorker(self.client, self.project.coefficients, parent=self)
        worker.result_ready.connect(self.on_result_ready)
        worker.finished.connect(lambda w=worker: self._on_worker_finished(w))
        self._workers.append(worker)
        self._update_status()
        worker.start()

    def on_result_ready(self, text: str) -> None:
        self.project.explanation = text
        self.load_from_state()

    def load_from_state(self) -> None:
        """Show the explanation stored in the project, or nothing."""
        if self.project.explanation:
            self.text.setMarkdown(self.project.explanation)
        else:
            self.text.clear()

    def _on_worker_finished(self, worker: ExplanationWorker) -> None:
        if worker in self._workers:
            self._workers.remove(worker)
        worker.deleteLater()
        self._update_status()

    def _update_status(self) -> None:
        pending = len(self._workers)
        self.lbl_status.setText(f"Analyzing… ({pending} pending)" if pending else "")

    def shutdown(self, timeout_ms: int = SHUTDOWN_WAIT_MS) -> None:
        """
        Cancel outstanding requests and drop their results.

        Each thread gets at most `timeout_ms` to finish. A thread still blocked
        in the HTTP call is detached from the panel and left to run out its
        request timeout.
        """
        for worker in list(self._workers):
            worker.cancel()
            worker.result_ready.disconnect(self.on_result_ready)
            if worker.wait(timeout_ms):
                continue
            logger.warning("Explanation request still running at shutdown; detaching it.")
            worker.finished.disconnect()
            worker.setParent(None)
            self._workers.remove(worker)
            _detached.append(worker)
        self._update_status()
