import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest
from click.testing import CliRunner

from psmio.psmioc import cli
from psmio.utils.logger import configure_from_env, get_logger, setup_logging


@pytest.fixture
def restore_psmio_logger():
    psmio_logger = logging.getLogger("psmio")
    level = psmio_logger.level
    propagate = psmio_logger.propagate
    handlers = list(psmio_logger.handlers)
    yield psmio_logger
    psmio_logger.propagate = propagate
    for handler in list(psmio_logger.handlers):
        psmio_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        psmio_logger.addHandler(handler)
    psmio_logger.setLevel(level)


def test_file_logging(tmp_path, restore_psmio_logger):
    log_file = tmp_path / "psmio.log"

    setup_logging(level="DEBUG", log_file=str(log_file), backup_count=2)
    get_logger("psmio.core.reader").debug("This message should be written to the log file")

    assert restore_psmio_logger.level == logging.DEBUG
    assert any(isinstance(h, RotatingFileHandler) for h in restore_psmio_logger.handlers)
    for handler in restore_psmio_logger.handlers:
        handler.flush()
    assert "This message should be written to the log file" in log_file.read_text()


def test_setup_logging_replaces_handlers(restore_psmio_logger):
    setup_logging(level=logging.WARNING)
    setup_logging(level=logging.WARNING)

    assert len(restore_psmio_logger.handlers) == 1
    assert restore_psmio_logger.level == logging.WARNING


def test_environment_variables(monkeypatch):
    monkeypatch.setenv("PSMIO_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("PSMIO_LOG_FILE", "env_test.log")

    assert configure_from_env() == {"level": "DEBUG", "log_file": "env_test.log"}


def test_environment_defaults(monkeypatch):
    monkeypatch.delenv("PSMIO_LOG_LEVEL", raising=False)
    monkeypatch.delenv("PSMIO_LOG_FILE", raising=False)

    assert configure_from_env() == {"level": "INFO"}


def test_cli_applies_log_level_from_environment(restore_psmio_logger, monkeypatch):
    monkeypatch.delenv("PSMIO_LOG_FILE", raising=False)
    param_file = Path(__file__).parent / "examples/DIANN_SYN/diann_legacy.params"

    result = CliRunner().invoke(
        cli,
        ["utils", "params", "--param-file", str(param_file)],
        env={"PSMIO_LOG_LEVEL": "DEBUG"},
    )

    assert result.exit_code == 0, result.output
    assert restore_psmio_logger.level == logging.DEBUG
    assert not any(isinstance(h, RotatingFileHandler) for h in restore_psmio_logger.handlers)
