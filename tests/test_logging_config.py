"""
Tests for loguru setup.
"""

import pytest

pytestmark = pytest.mark.fast

from wrapping.logging_config import logger, setup_logging


@pytest.fixture
def restore_logging():
    yield
    setup_logging(level="DEBUG", suppress_console=True, force=True)


def test_default_level_is_warning(monkeypatch, capsys, restore_logging):
    monkeypatch.delenv("WRAPPING_LOG_LEVEL", raising=False)
    setup_logging(suppress_console=False, force=True)

    logger.info("routine detail")
    logger.warning("needs attention")

    err = capsys.readouterr().err
    assert "routine detail" not in err
    assert "needs attention" in err


def test_level_from_environment(monkeypatch, capsys, restore_logging):
    monkeypatch.setenv("WRAPPING_LOG_LEVEL", "info")
    setup_logging(suppress_console=False, force=True)

    logger.info("routine detail")

    assert "routine detail" in capsys.readouterr().err


def test_machine_mode_suppresses_console(monkeypatch, capsys, restore_logging):
    monkeypatch.setenv("WRAPPING_MACHINE_MODE", "1")
    setup_logging(force=True)

    logger.warning("needs attention")

    assert "needs attention" not in capsys.readouterr().err
