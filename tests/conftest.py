"""Shared pytest fixtures for Timer Time tests."""

import os
import sys
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from timertime.database.db import configure_engine, init_db
from timertime.timer.controller import LifecycleController

from helpers import FakeViewHost


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def host():
    """Fake view host with a manually advanced clock."""
    return FakeViewHost()


@pytest.fixture
def controller(host):
    """Controller with the duration menu already presented."""
    ctrl = LifecycleController(host)
    ctrl.present()
    return ctrl
