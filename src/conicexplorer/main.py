"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) architecture and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the session data model (ProjectState).
2. Reads the explanation service settings once and builds its client.
3. Instantiates the Main Window (View), passing the model and the client in.
"""
import logging
import os
import sys

from PySide6.QtWidgets import QApplication

from conicexplorer.config import ExplanationSettings
from conicexplorer.controller.explanation import ExplanationClient
from conicexplorer.logging_config import setup_logging
from conicexplorer.model.state import ProjectState
from conicexplorer.view.main_window import MainWindow, VISIBLE_APP_NAME


def main() -> int:
    # 1. Setup Logging (Console)
    setup_logging(level=logging.INFO)

    # 2. Create the Qt Application
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")
    app = QApplication(sys.argv)
    app.setApplicationName(VISIBLE_APP_NAME)

    # 3. Initialize the Data Model and the remote collaborator
    project = ProjectState()
    client = ExplanationClient.from_settings(ExplanationSettings.from_env())

    # 4. Initialize the Main Window, passing the model
    window = MainWindow(project, client)
    window.show()

    # 5. Start Event Loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
