"""Line classification for the sectioned bead input format.

The input file is a sequence of sections, each introduced by a keyword line.
Keywords must appear in the order given by :class:`Section`; any of them may
be absent. Callers ask for one section and get told, line by line, whether
they have reached it, are inside it, or have left it.
"""

from __future__ import annotations

import enum
import logging
import pathlib
from collections.abc import Iterator

from heimdall.io.parsing.registry import ParsingError, SectionKeywordError

logger = logging.getLogger(__name__)


class Section(enum.IntEnum):
  """Section keywords, in the order the format requires."""

  BEADS = 0
  VSITES = 1
  BONDS = 2
  ANGLES = 3
  DIHEDRALS = 4
  IMPROPER = 5
  FEATURES = 6


class LineAction(enum.Enum):
  """What a caller should do with the current line."""

  SKIP = "continue"
  STOP = "break"
  READ = "read"
  UNMATCHED = ""


def _as_section(wanted: Section | str) -> Section:
  if isinstance(wanted, Section):
    return wanted
  try:
    return Section[wanted]
  except KeyError:
    msg = f"Keyword requested not in file format: {wanted!r}"
    raise SectionKeywordError(msg) from None


def check_line(
  line: str,
  wanted: Section | str,
  line_number: int,
  error: BaseException | None = None,
) -> LineAction:
  """Classify one input line relative to the wanted section.

  Args:
      line: The raw line, including its trailing newline if any.
      wanted: The section the caller is extracting.
      line_number: 1-based number of the line, used in error messages.
      error: The exception raised while reading the line, if any.
          ``EOFError`` marks the end of the input.

  Returns:
      ``SKIP`` for blank lines, comments and keywords before the wanted one;
      ``STOP`` at end of input or at a keyword after the wanted one;
      ``READ`` at the wanted keyword; ``UNMATCHED`` for anything else.

  Raises:
      SectionKeywordError: If ``wanted`` is not a section keyword.
      ParsingError: If ``error`` is anything other than end of input.

  """
  section = _as_section(wanted)
  if line and not line.strip():
    return LineAction.SKIP
  if error is not None:
    if isinstance(error, EOFError):
      return LineAction.STOP
    msg = f"Failed to read line {line_number} in input: {error}"
    raise ParsingError(msg) from error
  if line == "":
    return LineAction.STOP
  if line.lstrip().startswith("#"):
    return LineAction.SKIP

  for keyword in Section:
    if line.startswith(keyword.name):
      if keyword > section:
        return LineAction.STOP
      if keyword < section:
        return LineAction.SKIP
      return LineAction.READ
  return LineAction.UNMATCHED


def iter_section(
  file_path: str | pathlib.Path,
  wanted: Section | str,
) -> Iterator[tuple[int, list[str]]]:
  """Yield ``(line_number, fields)`` for every data line of a section.

  The keyword line itself is never yielded. Lines seen before the section
  header are ignored, and iteration ends at the next later keyword or at the
  end of the file.

  Raises:
      ParsingError: If the file cannot be opened or a line cannot be read.

  """
  section = _as_section(wanted)
  path = pathlib.Path(file_path)
  try:
    handle = path.open(encoding="utf-8")
  except OSError as e:
    msg = f"Failed to open the input file {path}: {e}"
    raise ParsingError(msg) from e

  reading = False
  line_number = 0
  with handle:
    while True:
      line_number += 1
      error: BaseException | None = None
      try:
        line = handle.readline()
      except (OSError, UnicodeDecodeError) as e:
        line, error = "", e
      if line == "" and error is None:
        error = EOFError()

      action = check_line(line, section, line_number, error)
      if action is LineAction.SKIP:
        continue
      if action is LineAction.STOP:
        break
      if action is LineAction.READ:
        logger.debug("Found %s section at line %d of %s", section.name, line_number, path)
        reading = True
        continue
      if not reading:
        continue
      yield line_number, line.split()
