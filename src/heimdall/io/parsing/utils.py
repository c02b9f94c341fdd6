"""Shared parsing utilities for geometry files.

This module converts biotite structures into :class:`Molecule` records and
holds the small helpers the individual readers share.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import numpy as np
from biotite.structure import AtomArray, AtomArrayStack

from heimdall.core.containers import Atom, Molecule
from heimdall.io.parsing.registry import ParsingError

logger = logging.getLogger(__name__)

SYMBOL_PATTERN = re.compile(r"[a-zA-Z]+")


def element_symbol(element: str, atom_name: str = "") -> str:
  """Normalize an element symbol, falling back to the atom name.

  Biotite stores elements upper case ("CL"); the rest of the code expects
  "Cl". If no element is given, the first alphabetic run of the atom name
  is used.
  """
  symbol = element.strip()
  if not symbol:
    match = SYMBOL_PATTERN.search(atom_name)
    symbol = match.group(0) if match else ""
  return symbol.capitalize()


def _check_atom_array_length(atom_array: AtomArray | AtomArrayStack) -> None:
  """Check if the AtomArray has a valid length."""
  length = atom_array.array_length()
  logger.debug("Checking AtomArray length: %d", length)
  if length == 0:
    msg = "AtomArray is empty."
    logger.error(msg)
    raise ParsingError(msg)


def _validate_atom_array_type(atom_array: Any) -> None:  # noqa: ANN401
  """Validate that the atom array is of the expected type."""
  if not isinstance(atom_array, (AtomArray | AtomArrayStack)):
    msg = f"Expected AtomArray or AtomArrayStack, but got {type(atom_array)}."
    logger.error(msg)
    raise TypeError(msg)


def atom_array_to_molecule(atom_array: AtomArray | AtomArrayStack) -> Molecule:
  """Convert a biotite AtomArray (or every model of a stack) to a Molecule."""
  _validate_atom_array_type(atom_array)
  _check_atom_array_length(atom_array)

  categories = atom_array.get_annotation_categories()
  has_ids = "atom_id" in categories
  atoms = []
  for i in range(atom_array.array_length()):
    name = str(atom_array.atom_name[i])
    symbol = element_symbol(str(atom_array.element[i]), name)
    atoms.append(
      Atom(
        symbol=symbol,
        name=name or symbol,
        mol_name=str(atom_array.res_name[i]),
        id=int(atom_array.atom_id[i]) if has_ids else i + 1,
        mol_id=int(atom_array.res_id[i]),
      ),
    )

  frames = np.asarray(atom_array.coord, dtype=np.float64)
  logger.debug("Converted %d atoms in %d frame(s).", len(atoms), 1 if frames.ndim == 2 else len(frames))
  return Molecule.create(atoms, frames)
