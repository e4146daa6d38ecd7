"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for the only blocking task of the
application: the remote explanation request.

Why is this file needed?
------------------------
1. Responsiveness: The HTTP round trip can take seconds. Running it on the
   main thread would freeze coefficient editing and drawing.
2. Signals: The result crosses back to the GUI thread through a Qt Signal.

Classes:
    ExplanationWorker: Runs one ExplanationClient.explain call.
"""
import logging

from PySide6.QtCore import QThread, Signal

from conicexplorer.controller.explanation import ExplanationClient
from conicexplorer.model.coefficients import Coefficients

logger = logging.getLogger(__name__)


class ExplanationWorker(QThread):
    # Markdown text or a user-facing error message
    result_ready = Signal(str)

    def __init__(self, client: ExplanationClient, coefficients: Coefficients, parent=None):
        super().__init__(parent)
        self.client = client
        # Immutable snapshot; later edits do not affect this request
        self.coefficients = coefficients

    def run(self) -> None:
        logger.info("Starting explanation request in background thread...")
        text = self.client.explain(self.coefficients)

        if self.isInterruptionRequested():
            logger.info("Explanation request cancelled; result dropped.")
            return
        self.result_ready.emit(text)

    def cancel(self) -> None:
        self.requestInterruption()
