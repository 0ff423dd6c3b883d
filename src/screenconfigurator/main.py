"""
Application Initialization
==========================
This module constructs the Model/View pair and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the parameter store (the single owner of the panel state).
2. Instantiates the Main Window (View).
3. Passes the store into the View so they can communicate.
4. Prevents circular import errors by being the orchestrator.
"""
from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from PySide6.QtCore import QCoreApplication
from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QApplication

from screenconfigurator.config import ICON_PATH, ORG_ID, VISIBLE_APP_NAME
from screenconfigurator.logging_config import setup_logging
from screenconfigurator.model.state import ParameterStore, ScreenParameters

logger = logging.getLogger(__name__)


def create_app(argv: Optional[list[str]] = None) -> QApplication:
    """Create and configure the QApplication instance."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setApplicationName(ORG_ID)

    app = QApplication(argv if argv is not None else sys.argv)
    app.setApplicationDisplayName(VISIBLE_APP_NAME)
    if os.path.exists(ICON_PATH):
        app.setWindowIcon(QIcon(ICON_PATH))
    return app


def run_gui(parameters: Optional[ScreenParameters] = None) -> int:
    """Open the configurator window and block until it is closed."""
    # Pulls in VTK
    from screenconfigurator.view.main_window import MainWindow

    app = create_app()

    store = ParameterStore(parameters)

    window = MainWindow(store)
    window.show()

    logger.info("Configurator window opened.")
    return app.exec()


def main() -> None:
    setup_logging(level=logging.INFO)
    sys.exit(run_gui())


if __name__ == "__main__":
    main()
