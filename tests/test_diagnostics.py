"""Tests for run-scoped logging."""

import io
import logging

import pytest

from heimdall.diagnostics import RunDiagnostics, verbosity_to_level

logger = logging.getLogger("heimdall.tests")


@pytest.mark.parametrize(
    ("verbosity", "level"),
    [(-1, logging.CRITICAL), (0, logging.ERROR), (1, logging.WARNING), (2, logging.INFO), (5, logging.DEBUG)],
)
def test_verbosity_to_level(verbosity, level):
    assert verbosity_to_level(verbosity) == level


def test_warnings_are_collected_and_written():
    stream = io.StringIO()
    with RunDiagnostics(1, stream=stream) as diagnostics:
        logger.info("hidden")
        logger.warning("Couldn't obtain MolID %s", "X")
        logger.error("broken")
    assert diagnostics.warnings == ["Couldn't obtain MolID X", "broken"]
    output = stream.getvalue()
    assert "hidden" not in output
    assert "Couldn't obtain MolID X" in output


def test_quiet_run_still_counts_warnings():
    stream = io.StringIO()
    with RunDiagnostics(0, stream=stream) as diagnostics:
        logger.warning("not shown")
    assert diagnostics.warnings == ["not shown"]
    assert stream.getvalue() == ""


def test_debug_output():
    stream = io.StringIO()
    with RunDiagnostics(3, stream=stream):
        logger.debug("details")
    assert "DEBUG heimdall.tests: details" in stream.getvalue()


def test_handlers_are_removed_on_exit():
    root = logging.getLogger("heimdall")
    handlers = list(root.handlers)
    level = root.level
    with RunDiagnostics(2):
        assert len(root.handlers) == len(handlers) + 2
    assert root.handlers == handlers
    assert root.level == level


def test_shows():
    diagnostics = RunDiagnostics(2)
    assert diagnostics.shows(1)
    assert diagnostics.shows(2)
    assert not diagnostics.shows(3)
