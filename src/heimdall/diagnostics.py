"""Run-scoped logging setup.

A :class:`RunDiagnostics` is created once per command-line run. It routes
library log records to stderr at the requested verbosity and keeps every
warning so the run can report how many were issued.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

VERBOSITY_LEVELS = {
  0: logging.ERROR,
  1: logging.WARNING,
  2: logging.INFO,
}

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def verbosity_to_level(verbosity: int) -> int:
  """Map the ``-v`` flag to a logging level; 3 and above is DEBUG."""
  if verbosity < 0:
    return logging.CRITICAL
  return VERBOSITY_LEVELS.get(verbosity, logging.DEBUG)


class WarningCollector(logging.Handler):
  """Keep every record at WARNING or above."""

  def __init__(self) -> None:
    super().__init__(level=logging.WARNING)
    self.records: list[logging.LogRecord] = []

  def emit(self, record: logging.LogRecord) -> None:
    self.records.append(record)


class RunDiagnostics:
  """Logging context for one run, usable as a context manager.

  Args:
      verbosity: 0 errors only, 1 warnings, 2 info, 3 or more debug.
      stream: Where log records are written.
      logger_name: Logger the handlers attach to.

  """

  def __init__(
    self,
    verbosity: int = 1,
    stream: TextIO | None = None,
    logger_name: str = "heimdall",
  ) -> None:
    self.verbosity = verbosity
    self.logger = logging.getLogger(logger_name)
    self.collector = WarningCollector()
    self.handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    self.handler.setLevel(verbosity_to_level(verbosity))
    self.handler.setFormatter(logging.Formatter(LOG_FORMAT))
    self._previous_level = self.logger.level

  def __enter__(self) -> RunDiagnostics:
    self.logger.addHandler(self.handler)
    self.logger.addHandler(self.collector)
    self.logger.setLevel(min(self.handler.level, logging.WARNING))
    return self

  def __exit__(self, *exc_info: object) -> None:
    self.logger.removeHandler(self.handler)
    self.logger.removeHandler(self.collector)
    self.logger.setLevel(self._previous_level)

  @property
  def warnings(self) -> list[str]:
    """Messages of the warnings and errors logged during the run."""
    return [record.getMessage() for record in self.collector.records]

  def shows(self, verbosity: int) -> bool:
    """Whether output meant for ``verbosity`` should be printed."""
    return verbosity <= self.verbosity
