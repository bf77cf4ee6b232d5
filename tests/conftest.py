"""Shared fixtures for the calibration tool tests."""
import logging

import pytest

from sensor_calibration.config.settings import Settings


class ScriptedInput:
    """Feeds prepared answers to prompts and records the prompts shown."""

    def __init__(self, answers):
        self._answers = list(answers)
        self.prompts = []

    def __call__(self, prompt=""):
        self.prompts.append(prompt)
        if not self._answers:
            raise EOFError
        return self._answers.pop(0)

    @property
    def remaining(self):
        return len(self._answers)


@pytest.fixture
def scripted_input():
    return ScriptedInput


@pytest.fixture
def quiet_settings(tmp_path):
    """Defaults without the pause prompt, logging into the test directory."""
    settings = Settings(str(tmp_path / "missing.yaml"))
    settings.shell.pause_after_action = False
    settings.logging.log_file = str(tmp_path / "test.log")
    return settings


@pytest.fixture
def restore_root_logger():
    """Put the root logger back after a test reconfigures it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
