"""Solvent accessible surface area per bead, backed by biotite."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np
from biotite import structure

from heimdall.features.featuremap import FeatureMap

if TYPE_CHECKING:
  from heimdall.core.containers import Molecule
  from heimdall.io.parsing.beads import Bead

logger = logging.getLogger(__name__)

PROBE_RADIUS = 1.4  # Angstrom, water
POINT_NUMBER = 1000


def atom_sasa(molecule: Molecule, frame: int = 0) -> np.ndarray:
  """Per-atom SASA in square Angstrom, using single-atom vdW radii.

  Atoms biotite has no radius for get 0.
  """
  atom_array = molecule.to_atom_array(frame)
  values = structure.sasa(
    atom_array,
    probe_radius=PROBE_RADIUS,
    point_number=POINT_NUMBER,
    vdw_radii="Single",
  )
  unknown = np.isnan(values)
  if np.any(unknown):
    logger.warning(
      "No vdW radius for %d atom(s) (%s); their SASA is set to 0.",
      int(np.sum(unknown)),
      ", ".join(sorted(set(np.asarray(molecule.elements)[unknown]))),
    )
  return np.nan_to_num(values, nan=0.0)


def sasa(molecule: Molecule, beads: Sequence[Bead], frame: int = 0) -> FeatureMap:
  """Weighted sum of the atomic SASA over each bead, as ``sasa``."""
  per_atom = atom_sasa(molecule, frame)
  features = FeatureMap.empty(len(beads))
  for i, bead in enumerate(beads):
    weights = np.asarray(bead.weights, dtype=np.float64)
    features.set(i, "sasa", float(np.sum(per_atom[list(bead.indexes)] * weights)))
  return features
