"""GROMACS GRO file parsing backed by biotite."""

from __future__ import annotations

import logging
import pathlib

from biotite import InvalidFileError
from biotite.structure.io import gro

from heimdall.core.containers import Molecule
from heimdall.io.parsing.registry import ParsingError, register_parser
from heimdall.io.parsing.utils import atom_array_to_molecule

logger = logging.getLogger(__name__)


@register_parser(["gro"])
def load_gro(file_path: str | pathlib.Path, **kwargs: object) -> Molecule:  # noqa: ARG001
  """Load a GRO file. Every model becomes a frame; coordinates are in Angstrom.

  Raises:
      ParsingError: If biotite cannot read the file.

  """
  try:
    gro_file = gro.GROFile.read(str(file_path))
    atom_array = gro_file.get_structure()
  except (OSError, ValueError, InvalidFileError) as e:
    msg = f"Failed to parse GRO from source: {file_path}. {e}"
    raise ParsingError(msg) from e
  return atom_array_to_molecule(atom_array)
