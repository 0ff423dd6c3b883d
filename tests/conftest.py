import os

import pytest
from PySide6.QtWidgets import QApplication

from screenconfigurator.model.state import ParameterStore, ScreenParameters


@pytest.fixture(scope="session")
def qapp():
    # Widgets are built without a display
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def params():
    return ScreenParameters()


@pytest.fixture
def store(qapp):
    return ParameterStore()
