import io
import logging

import pytest

from numroutines import logger


@pytest.fixture
def clean_root():
    root = logging.getLogger(logger.ROOT_NAME)
    saved_handlers = root.handlers[:]
    saved_level = root.level
    root.handlers.clear()
    yield root
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def test_custom_levels_registered():
    assert logging.getLevelName(logger.DEBUG2) == "DEBUG2"
    assert logging.getLevelName(logger.DEBUG3) == "DEBUG3"


def test_module_logger_in_hierarchy():
    log = logger.get_logger("numroutines.spline")
    assert log.name == "numroutines.spline"
    assert hasattr(log, "debug2") and hasattr(log, "debug3")


def test_setup_and_debug_levels(clean_root):
    buf = io.StringIO()
    logger.setup(level=6, stream=buf)
    log = logger.get_logger("numroutines.test")
    log.info("std message")
    log.debug2("debug2 message")
    log.debug3("debug3 message")
    out = buf.getvalue()
    assert "INFO" in out and "std message" in out
    assert "DEBUG2" in out
    assert "DEBUG3" in out


def test_setup_is_idempotent(clean_root):
    logger.setup(stream=io.StringIO())
    logger.setup(stream=io.StringIO())
    assert len(clean_root.handlers) == 1


def test_setup_reads_environment(clean_root, monkeypatch):
    monkeypatch.setenv("NUMROUTINES_LOG_LEVEL", "WARNING")
    logger.setup(stream=io.StringIO())
    assert clean_root.level == logging.WARNING


def test_set_level_accepts_verbosity_ints(clean_root):
    logger.set_level(0)
    assert clean_root.level == logging.ERROR
    logger.set_level("5")
    assert clean_root.level == logger.DEBUG2
    logger.set_level("debug")
    assert clean_root.level == logging.DEBUG


def test_setup_bad_env_level_attaches_nothing(clean_root, monkeypatch):
    monkeypatch.setenv("NUMROUTINES_LOG_LEVEL", "bogus")
    with pytest.raises(ValueError):
        logger.setup(stream=io.StringIO())
    assert clean_root.handlers == []


def test_setup_retry_after_bad_level(clean_root):
    with pytest.raises(ValueError):
        logger.setup(level="bogus", stream=io.StringIO())
    buf = io.StringIO()
    logger.setup(level="DEBUG", stream=buf)
    assert clean_root.level == logging.DEBUG
    assert len(clean_root.handlers) == 1
    logger.get_logger("numroutines.test").debug("after retry")
    assert "after retry" in buf.getvalue()
