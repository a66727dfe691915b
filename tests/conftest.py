"""Shared pytest fixtures for MyTrainer tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from mytrainer.workout.engine import SessionController

from helpers import RecordingAnnouncer


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Never read the real user's settings file."""
    monkeypatch.setenv("MYTRAINER_SETTINGS", str(tmp_path / "settings.json"))


@pytest.fixture
def announcer():
    return RecordingAnnouncer()


@pytest.fixture
def controller(qapp, announcer):
    """Fresh SessionController wired to a recording announcer."""
    return SessionController(parent=None, announcer=announcer)


@pytest.fixture
def sound_manager(qapp, tmp_path):
    from mytrainer.audio.sounds import SoundManager
    return SoundManager(parent=None, sounds_dir=tmp_path / "sounds")
