"""Shape descriptors from the gyration tensor.

These functions work with JAX arrays and are compatible with JAX
transformations (jit, vmap, etc.).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

import jax
import jax.numpy as jnp
import numpy as np

from heimdall.features.featuremap import FeatureMap

if TYPE_CHECKING:
  from heimdall.core.containers import Molecule
  from heimdall.io.parsing.beads import Bead
  from heimdall.types import AtomWeights, Coordinates, GyrationTensor

logger = logging.getLogger(__name__)

EPSILON = 1e-8


@jax.jit
def gyration_tensor(coordinates: Coordinates, weights: AtomWeights) -> GyrationTensor:
  """Weighted gyration tensor of a set of points.

  Args:
    coordinates: Positions with shape (N, 3).
    weights: Non-negative weight per position, shape (N,).

  Returns:
    The (3, 3) tensor ``sum_i w_i (r_i - c)(r_i - c)^T / sum_i w_i`` where
    ``c`` is the weighted centre.

  """
  total = jnp.sum(weights)
  centre = jnp.sum(coordinates * weights[:, None], axis=0) / total
  centred = coordinates - centre
  return jnp.einsum("i,ij,ik->jk", weights, centred, centred) / total


@jax.jit
def shape_descriptors(coordinates: Coordinates, weights: AtomWeights) -> jnp.ndarray:
  """Elongation and planarity from the gyration tensor eigenvalues.

  With eigenvalues ``l1 >= l2 >= l3``, elongation is ``1 - l2 / l1`` and
  planarity is ``1 - l3 / l2``. A vanishing denominator gives 0.

  Returns:
    Array ``[elongation, planarity]``.

  """
  eigenvalues = jnp.linalg.eigvalsh(gyration_tensor(coordinates, weights))
  l3, l2, l1 = eigenvalues[0], eigenvalues[1], eigenvalues[2]
  elongation = jnp.where(l1 > EPSILON, 1.0 - l2 / jnp.maximum(l1, EPSILON), 0.0)
  planarity = jnp.where(l2 > EPSILON, 1.0 - l3 / jnp.maximum(l2, EPSILON), 0.0)
  return jnp.stack([elongation, planarity])


def shape_properties(
  coordinates: Coordinates,
  molecule: Molecule,  # noqa: ARG001
  beads: Sequence[Bead],
) -> FeatureMap:
  """Compute ``elongation`` and ``planarity`` for each bead."""
  coords = jnp.asarray(coordinates)
  features = FeatureMap.empty(len(beads))
  for i, bead in enumerate(beads):
    indexes = jnp.asarray(bead.indexes, dtype=jnp.int32)
    weights = jnp.asarray(bead.weights)
    elongation, planarity = np.asarray(shape_descriptors(coords[indexes], weights))
    features.set(i, "elongation", elongation)
    features.set(i, "planarity", planarity)
  logger.debug("Computed shape descriptors for %d beads.", len(beads))
  return features
