from __future__ import annotations

import logging
from contextlib import contextmanager

import pytest
from loguru import logger

from blobtour import APP_VERSION
from blobtour.logging_utils import logging_context, setup_logging, setup_test_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    setup_logging(force=True, level="INFO")
    yield
    setup_logging(force=True, level="INFO")


@contextmanager
def capture_records(level=logging.INFO):
    records = []

    class ListHandler(logging.Handler):
        def emit(self, record):
            records.append(record)

    handler = ListHandler()
    handler.setLevel(level)
    root = logging.getLogger()
    prev_level = root.level
    root.setLevel(level)
    root.addHandler(handler)
    try:
        yield records
    finally:
        root.removeHandler(handler)
        root.setLevel(prev_level)


def test_setup_logging_attaches_metadata():
    with capture_records() as records:
        logger.info("hello world")

    record = records[-1]
    assert record.getMessage() == "hello world"
    assert record.service_version == APP_VERSION
    assert record.run_id == "-"
    assert record.stage == "-"


def test_logging_context_binds_run_and_stage():
    with capture_records() as records:
        with logging_context(run_id="run-1", stage="uploading"):
            logger.info("inside")
        logger.info("outside")

    inside, outside = records[-2], records[-1]
    assert (inside.run_id, inside.stage) == ("run-1", "uploading")
    assert (outside.run_id, outside.stage) == ("-", "-")


def test_level_filters_debug():
    setup_logging(force=True, level="WARNING")

    with capture_records(level=logging.DEBUG) as records:
        logger.info("dropped")
        logger.warning("kept")

    assert [r.getMessage() for r in records] == ["kept"]


def test_setup_test_logging_writes_file(tmp_path):
    setup_test_logging(tmp_path / "logs", level="INFO")

    logger.info("to file")
    setup_logging(force=True)  # closes the file sink

    content = (tmp_path / "logs" / "pytest.log").read_text()
    assert "to file" in content


def test_console_sink_writes_to_stdout(capsys):
    setup_logging(force=True, level="INFO")

    logger.info("console line")

    captured = capsys.readouterr()
    assert "console line" in captured.out
    assert "run=- | stage=-" in captured.out
    assert "console line" not in captured.err
