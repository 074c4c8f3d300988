"""Tests for logging_setup.py."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from timetrack.logging_setup import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_writes_log_file(self, tmp_path: Path) -> None:
        log_file = setup_logging(log_dir=tmp_path / "logs", console=False)

        logging.getLogger("timetrack.test").info("hello file")
        for h in logging.getLogger().handlers:
            h.flush()

        assert log_file == tmp_path / "logs" / "timetrack.log"
        assert "hello file" in log_file.read_text()

    def test_console_filters_third_party_noise(
        self, tmp_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        setup_logging(log_dir=tmp_path, console=True)

        logging.getLogger("textual").warning("third party chatter")
        logging.getLogger("timetrack.store").warning("own warning")

        err = capsys.readouterr().err
        assert "own warning" in err
        assert "third party chatter" not in err

    def test_unusable_log_dir_disables_file_logging(self, tmp_path: Path) -> None:
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")

        assert setup_logging(log_dir=blocker, console=False) is None
