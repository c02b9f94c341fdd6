"""Bead and feature definitions from sectioned input files.

A bead groups whole or partial atoms that are treated as one unit when
descriptors are computed. Data lines look like::

    1 3/2,7,8

where the first field is an identifier that is not used here and the second
is a comma-separated list of 1-based atom ids. ``3/2`` puts half of atom 3 in
the bead; a plain id puts the whole atom in.
"""

from __future__ import annotations

import logging
import pathlib
from collections.abc import Sequence

from flax.struct import dataclass, field

from heimdall.io.parsing.registry import ParsingError
from heimdall.io.parsing.sections import Section, iter_section

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bead:
  """A group of (possibly fractional) atoms.

  Attributes:
      indexes: 0-based atom indexes, in input order.
      weights: Fraction of each atom that belongs to the bead.

  """

  indexes: tuple[int, ...] = field(pytree_node=False)
  weights: tuple[float, ...]

  def __len__(self) -> int:
    return len(self.indexes)

  @classmethod
  def whole(cls, n_atoms: int) -> Bead:
    """Bead holding every atom of an ``n_atoms`` molecule with weight 1."""
    return cls(indexes=tuple(range(n_atoms)), weights=(1.0,) * n_atoms)


def validate_beads(beads: Sequence[Bead], n_atoms: int) -> None:
  """Check that every bead only refers to atoms of the molecule.

  Raises:
      ParsingError: If a bead index is negative or past the last atom.

  """
  for i, bead in enumerate(beads):
    for index in bead.indexes:
      if not 0 <= index < n_atoms:
        msg = f"Bead {i + 1} refers to atom {index + 1}, but the molecule has {n_atoms} atoms"
        raise ParsingError(msg)


def _payload(fields: list[str], line_number: int) -> str:
  if len(fields) < 2:
    msg = f"Line {line_number} of the input file has no payload field"
    raise ParsingError(msg)
  return fields[1]


def _parse_token(token: str, position: int, line_number: int) -> tuple[int, float]:
  atom_id, denominator = token, "1.0"
  if "/" in token:
    atom_id, denominator = token.split("/", 1)
  try:
    weight = 1 / float(denominator)
  except (ValueError, ZeroDivisionError) as e:
    msg = (
      f"Failed to parse the {position} field in the {line_number} line of the input file: {e}"
    )
    raise ParsingError(msg) from e
  try:
    index = int(atom_id)
  except ValueError as e:
    msg = f"Failed to convert bead id: {atom_id} in line {line_number} to int in the input file: {e}"
    raise ParsingError(msg) from e
  if index < 1:
    msg = f"Atom id {index} in line {line_number} of the input file must be 1 or greater"
    raise ParsingError(msg)
  # 1-based in the file, 0-based everywhere else
  return index - 1, weight


def parse_beads(
  file_path: str | pathlib.Path,
  section: Section | str = Section.BEADS,
) -> list[Bead]:
  """Read the bead definitions of an input file.

  Args:
      file_path: Path to the input file.
      section: Section holding the bead lines. Older input files kept the
          bead lines under ``FEATURES``; pass ``Section.FEATURES`` to read
          those.

  Returns:
      One bead per data line, in file order. An empty list if the section is
      empty or missing.

  Raises:
      ParsingError: If the file cannot be read or a token is malformed.

  """
  beads: list[Bead] = []
  for line_number, fields in iter_section(file_path, section):
    tokens = _payload(fields, line_number).replace(" ", "").split(",")
    parsed = [_parse_token(token, i, line_number) for i, token in enumerate(tokens)]
    beads.append(
      Bead(
        indexes=tuple(index for index, _ in parsed),
        weights=tuple(weight for _, weight in parsed),
      ),
    )
  logger.debug("Read %d beads from %s", len(beads), file_path)
  return beads


def parse_features(file_path: str | pathlib.Path) -> list[str]:
  """Read the ordered feature names of an input file's ``FEATURES`` section."""
  features: list[str] = []
  for line_number, fields in iter_section(file_path, Section.FEATURES):
    features.append(_payload(fields, line_number))
  logger.debug("Read %d feature names from %s", len(features), file_path)
  return features
