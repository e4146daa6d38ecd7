import threading
import time

from conicexplorer.controller.explanation import ExplanationClient
from conicexplorer.model.state import ProjectState
from conicexplorer.view.main_window import MainWindow
from conicexplorer.view.panels import explanation_panel
from conicexplorer.view.panels.explanation_panel import ExplanationPanel


class BlockingClient(ExplanationClient):
    """Holds the worker thread inside `explain` until released."""
    def __init__(self):
        super().__init__("secret")
        self.started = threading.Event()
        self.release = threading.Event()

    def explain(self, coeffs):
        self.started.set()
        self.release.wait(10)
        return "## Late reply"


def test_result_is_stored_and_shown(qapp):
    panel = ExplanationPanel(ProjectState(), ExplanationClient(None))
    panel.on_result_ready("## Ellipse")

    assert panel.project.explanation == "## Ellipse"
    assert "Ellipse" in panel.text.toPlainText()


def test_reset_clears_previous_explanation(qapp):
    window = MainWindow(ProjectState(), ExplanationClient(None))
    window.explanation_panel.on_result_ready("## Ellipse")

    window.on_reset()

    assert window.project.explanation is None
    assert window.explanation_panel.text.toPlainText() == ""


def test_shutdown_does_not_wait_for_blocked_request(qapp):
    client = BlockingClient()
    panel = ExplanationPanel(ProjectState(), client)
    panel.on_explain_clicked()
    assert client.started.wait(5)

    start = time.monotonic()
    panel.shutdown(timeout_ms=50)
    elapsed = time.monotonic() - start

    worker = explanation_panel._detached[-1]
    client.release.set()
    assert worker.wait(5000)
    qapp.processEvents()

    assert elapsed < 2.0
    assert panel._workers == []
    assert panel.project.explanation is None
    assert panel.text.toPlainText() == ""
