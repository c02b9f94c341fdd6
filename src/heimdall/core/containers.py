"""Dataclasses for molecules.

This module defines:
- Atom: per-atom metadata read from a geometry file
- Molecule: atoms plus one or more coordinate frames
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np
from biotite import structure
from flax.struct import dataclass, field

from heimdall.exceptions import ParsingError

if TYPE_CHECKING:
  from heimdall.types import Coordinates, Elements, Frames


@dataclass(frozen=True)
class Atom:
  """Metadata for a single atom.

  Attributes:
    symbol: Element symbol, e.g. "C" or "Cl".
    name: Display name of the atom.
    mol_name: Residue or molecule name.
    id: 1-based serial number.
    mol_id: Residue or molecule number.

  """

  symbol: str = field(pytree_node=False)
  name: str = field(pytree_node=False)
  mol_name: str = field(pytree_node=False)
  id: int = field(pytree_node=False)
  mol_id: int = field(pytree_node=False, default=1)


@dataclass(frozen=True, kw_only=True)
class Molecule:
  """A molecule with one or more coordinate frames.

  Attributes:
    atoms: Atom metadata, in file order.
    coordinates: Positions in Angstrom. Shape (N_frames, N_atoms, 3).
    charge: Total charge.
    multiplicity: Spin multiplicity.

  """

  atoms: tuple[Atom, ...] = field(pytree_node=False)
  coordinates: Frames
  charge: int = field(pytree_node=False, default=0)
  multiplicity: int = field(pytree_node=False, default=1)

  @classmethod
  def create(
    cls,
    atoms: Sequence[Atom],
    frames: Sequence[Coordinates] | np.ndarray,
  ) -> Molecule:
    """Build a molecule, checking that every frame has one row per atom.

    Raises:
        ParsingError: If there are no frames or a frame's row count differs
            from the number of atoms.

    """
    coordinates = np.asarray(frames, dtype=np.float64)
    if coordinates.ndim == 2:
      coordinates = coordinates[np.newaxis]
    if coordinates.ndim != 3 or coordinates.shape[0] == 0:
      msg = f"Expected at least one (N_atoms, 3) frame, got shape {coordinates.shape}"
      raise ParsingError(msg)
    if coordinates.shape[1] != len(atoms) or coordinates.shape[2] != 3:
      msg = (
        f"Coordinate frames of shape {coordinates.shape[1:]} do not match {len(atoms)} atoms"
      )
      raise ParsingError(msg)
    return cls(atoms=tuple(atoms), coordinates=coordinates)

  def __len__(self) -> int:
    return len(self.atoms)

  @property
  def n_frames(self) -> int:
    """Number of coordinate frames."""
    return int(self.coordinates.shape[0])

  @property
  def elements(self) -> Elements:
    """Element symbols, in atom order."""
    return [atom.symbol for atom in self.atoms]

  def frame(self, index: int = 0) -> np.ndarray:
    """Coordinates of one frame, shape (N_atoms, 3)."""
    return self.coordinates[index]

  def to_atom_array(self, frame: int = 0) -> structure.AtomArray:
    """Export one frame as a biotite AtomArray."""
    atom_array = structure.AtomArray(len(self.atoms))
    atom_array.coord = self.frame(frame).astype(np.float32)
    atom_array.element = np.array([atom.symbol.upper() for atom in self.atoms])
    atom_array.atom_name = np.array([atom.name for atom in self.atoms])
    atom_array.res_name = np.array([atom.mol_name for atom in self.atoms])
    atom_array.res_id = np.array([atom.mol_id for atom in self.atoms], dtype=int)
    atom_array.hetero = np.ones(len(self.atoms), dtype=bool)
    return atom_array
