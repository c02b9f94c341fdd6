"""XYZ file parsing.

An XYZ file is a sequence of frames, each made of an atom count line, a
comment line and one ``symbol x y z`` line per atom. XYZ carries no residue
information, so every atom gets the molecule name ``MOL`` and id 1.
"""

from __future__ import annotations

import logging
import pathlib

import numpy as np

from heimdall.core.containers import Atom, Molecule
from heimdall.io.parsing.registry import ParsingError, register_parser
from heimdall.io.parsing.utils import element_symbol

logger = logging.getLogger(__name__)

DEFAULT_MOL_NAME = "MOL"


def _read_frame(
  lines: list[str],
  start: int,
  path: pathlib.Path,
) -> tuple[list[str], list[list[float]], int]:
  """Read the frame starting at ``lines[start]``; return symbols, coords and the next start."""
  try:
    n_atoms = int(lines[start].split()[0])
  except (ValueError, IndexError) as e:
    msg = f"Expected an atom count in line {start + 1} of {path}"
    raise ParsingError(msg) from e

  body = lines[start + 2 : start + 2 + n_atoms]
  if len(body) < n_atoms:
    msg = f"{path} ends after {len(body)} of {n_atoms} atoms in the frame at line {start + 1}"
    raise ParsingError(msg)

  symbols: list[str] = []
  coords: list[list[float]] = []
  for offset, line in enumerate(body):
    line_number = start + 3 + offset
    parts = line.split()
    if len(parts) < 4:
      msg = f"Line {line_number} of {path} should hold a symbol and three coordinates"
      raise ParsingError(msg)
    try:
      coords.append([float(parts[1]), float(parts[2]), float(parts[3])])
    except ValueError as e:
      msg = f"Failed to read coordinates in line {line_number} of {path}: {e}"
      raise ParsingError(msg) from e
    symbols.append(element_symbol(parts[0]))
  return symbols, coords, start + 2 + n_atoms


@register_parser(["xyz"])
def load_xyz(file_path: str | pathlib.Path, **kwargs: object) -> Molecule:  # noqa: ARG001
  """Load every frame of an XYZ file.

  Raises:
      ParsingError: If the file cannot be read, a frame is truncated or
          malformed, or frames disagree on their atoms.

  """
  path = pathlib.Path(file_path)
  try:
    lines = path.read_text(encoding="utf-8").splitlines()
  except (OSError, UnicodeDecodeError) as e:
    msg = f"Failed to open XYZ file {path}: {e}"
    raise ParsingError(msg) from e

  symbols: list[str] | None = None
  frames: list[list[list[float]]] = []
  start = 0
  while start < len(lines):
    if not lines[start].strip():
      start += 1
      continue
    frame_symbols, coords, start = _read_frame(lines, start, path)
    if symbols is None:
      symbols = frame_symbols
    elif frame_symbols != symbols:
      msg = f"Frame {len(frames) + 1} of {path} does not have the atoms of the first frame"
      raise ParsingError(msg)
    frames.append(coords)

  if symbols is None:
    msg = f"No frames found in XYZ file {path}"
    raise ParsingError(msg)

  atoms = [
    Atom(symbol=symbol, name=symbol, mol_name=DEFAULT_MOL_NAME, id=i + 1, mol_id=1)
    for i, symbol in enumerate(symbols)
  ]
  logger.debug("Read %d frame(s) of %d atoms from %s", len(frames), len(atoms), path)
  return Molecule.create(atoms, np.array(frames, dtype=np.float64))
