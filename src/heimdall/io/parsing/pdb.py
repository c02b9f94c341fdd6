"""PDB reading, including the malformed files LigParGen writes.

LigParGen emits files that claim to be PDB but do not respect its column
layout, so a column-based reader misplaces fields. Those files are
recognised by the remark on their first line and read by splitting on
whitespace instead.
"""

from __future__ import annotations

import dataclasses
import logging
import pathlib

import numpy as np
from biotite import InvalidFileError
from biotite.structure.io import pdb

from heimdall.core.containers import Atom, Molecule
from heimdall.io.parsing.registry import ParsingError, register_parser
from heimdall.io.parsing.utils import SYMBOL_PATTERN, atom_array_to_molecule

logger = logging.getLogger(__name__)

LIGPARGEN_MARKER = "REMARK LIGPARGEN GENERATED PDB"
ATOM_RECORDS = ("ATOM", "HETATM")


@dataclasses.dataclass(frozen=True)
class LigParGenRecord:
  """Positions of the fields in a whitespace-split LigParGen atom line.

  ``ATOM      1  C00 UNK     1      -1.034   0.274   0.011``
  """

  atom_name: int = 2
  res_name: int = 3
  res_id: int = 4
  x: int = 5
  y: int = 6
  z: int = 7

  @property
  def n_fields(self) -> int:
    return max(dataclasses.astuple(self)) + 1


LIGPARGEN_RECORD = LigParGenRecord()


def read_standard_pdb(file_path: str | pathlib.Path) -> Molecule:
  """Read a standards-compliant PDB file with biotite, every model as a frame."""
  try:
    pdb_file = pdb.PDBFile.read(str(file_path))
    atom_array = pdb_file.get_structure(extra_fields=["atom_id"])
  except (OSError, ValueError, InvalidFileError) as e:
    msg = f"Failed to parse PDB from source: {file_path}. {e}"
    raise ParsingError(msg) from e
  return atom_array_to_molecule(atom_array)


def _parse_ligpargen_line(
  line: str,
  serial: int,
  line_number: int,
  file_path: pathlib.Path,
  record: LigParGenRecord = LIGPARGEN_RECORD,
) -> tuple[Atom, tuple[float, float, float]]:
  chunks = line.split()
  if len(chunks) < record.n_fields:
    msg = (
      f"Line {line_number} of {file_path} has {len(chunks)} fields, "
      f"expected at least {record.n_fields}"
    )
    raise ParsingError(msg)

  match = SYMBOL_PATTERN.search(chunks[record.atom_name])
  symbol = match.group(0) if match else ""
  try:
    mol_id = int(chunks[record.res_id])
  except ValueError as e:
    logger.warning(
      "Couldn't obtain MolID for an atom in a LigParGen PDB: %s. Will set to 1", e,
    )
    mol_id = 1

  try:
    coord = (
      float(chunks[record.x]),
      float(chunks[record.y]),
      float(chunks[record.z]),
    )
  except ValueError as e:
    msg = f"Failed to read coordinates in line {line_number} of {file_path}: {e}"
    raise ParsingError(msg) from e

  atom = Atom(
    symbol=symbol,
    name=symbol,
    mol_name=chunks[record.res_name],
    id=serial,
    mol_id=mol_id,
  )
  return atom, coord


@register_parser(["pdb"])
def load_pdb(file_path: str | pathlib.Path, **kwargs: object) -> Molecule:  # noqa: ARG001
  """Load a PDB file, recovering LigParGen output if needed.

  If the first line carries the LigParGen remark, every ATOM/HETATM line is
  split on whitespace and read field by field. Otherwise the file is handed
  unchanged to :func:`read_standard_pdb`.

  Args:
      file_path: Path to the PDB file.
      **kwargs: Additional arguments (ignored).

  Returns:
      The molecule. LigParGen files yield exactly one frame.

  Raises:
      ParsingError: If the file cannot be opened or a coordinate cannot be
          read.

  """
  path = pathlib.Path(file_path)
  try:
    handle = path.open(encoding="utf-8")
  except OSError as e:
    msg = f"Failed to open PDB file {path}: {e}"
    raise ParsingError(msg) from e

  atoms: list[Atom] = []
  coords: list[tuple[float, float, float]] = []
  with handle:
    try:
      first = handle.readline()
      if LIGPARGEN_MARKER not in first:
        handle.close()
        return read_standard_pdb(path)

      logger.info("%s was written by LigParGen, reading fields by whitespace.", path)
      for line_number, line in enumerate(handle, start=2):
        if not line.startswith(ATOM_RECORDS):
          continue
        atom, coord = _parse_ligpargen_line(line, len(atoms) + 1, line_number, path)
        atoms.append(atom)
        coords.append(coord)
    except UnicodeDecodeError as e:
      msg = f"Failed to decode PDB file {path}: {e}"
      raise ParsingError(msg) from e

  if not atoms:
    msg = f"No atom records found in LigParGen file {path}"
    raise ParsingError(msg)
  return Molecule.create(atoms, np.array([coords], dtype=np.float64))
