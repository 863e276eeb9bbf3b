from loguru import logger

from saucedemo_tools import common
from saucedemo_tools.common import ensure_directory, init_logger


def test_file_sink_receives_messages(monkeypatch, tmp_path):
    monkeypatch.setattr(common, "_logger_initialized", False)
    log_file = tmp_path / "logs" / "ui_tests.log"

    init_logger(level="debug", log_file=str(log_file))
    logger.info("Browser started: firefox")
    logger.complete()

    assert "Browser started: firefox" in log_file.read_text(encoding="utf-8")
    init_logger(force=True)


def test_second_init_is_ignored_unless_forced(monkeypatch, tmp_path):
    monkeypatch.setattr(common, "_logger_initialized", True)
    log_file = tmp_path / "ignored.log"

    init_logger(log_file=str(log_file))

    assert not log_file.exists()


def test_ensure_directory(tmp_path):
    target = tmp_path / "a" / "b"

    assert ensure_directory(str(target)) == str(target)
    assert target.is_dir()
    assert ensure_directory("") == ""
