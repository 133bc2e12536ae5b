from __future__ import annotations

import logging
from io import StringIO

from points_import.logging.init import (
    APP_LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    reset_logging,
    setup_logging,
)


def _capture_logger(name: str) -> tuple[logging.Logger, StringIO]:
    out = StringIO()
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    for h in logger.handlers[:]:
        logger.removeHandler(h)
    handler = logging.StreamHandler(out)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger, out


def test_setup_logging_configures_app_logger():
    logger = setup_logging()
    assert logger.name == APP_LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    first = setup_logging()
    second = setup_logging()
    assert first is second
    assert len(second.handlers) == 1
    assert get_logger() is first


def test_labeled_prefixes():
    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    logger, out = _capture_logger("test_points_import_labels")
    logger.info("info message")
    logger.warning("warn message")
    logger.error("error message")
    logger.log(SUMMARY_LEVEL, "files=0/0")
    lines = out.getvalue().splitlines()
    assert lines == ["INFO info message", "WARN warn message", "ERROR error message", "SUMMARY files=0/0"]


def test_exception_text_only_for_errors():
    logger, out = _capture_logger("test_points_import_exc")
    try:
        raise ValueError("bad cell")
    except ValueError:
        logger.exception("row 5: unexpected error")
        logger.warning("row 5: warning", exc_info=True)
    text = out.getvalue()
    assert text.startswith("ERROR row 5: unexpected error\nTraceback")
    assert "WARN row 5: warning\n" in text
    assert text.count("Traceback") == 1


def test_log_summary_goes_to_stdout(capsys):
    setup_logging()
    log_summary("files=1/1 success=1")
    assert "SUMMARY files=1/1 success=1" in capsys.readouterr().out


def test_child_loggers_propagate_into_app_logger(capsys):
    setup_logging()
    logging.getLogger(f"{APP_LOGGER_NAME}.services.orchestrator").info("file=a.xlsx total=1")
    assert "INFO file=a.xlsx total=1" in capsys.readouterr().out


def test_reset_logging_removes_handlers():
    logger = setup_logging()
    reset_logging()
    assert logger.handlers == []
    assert logger.propagate is True
