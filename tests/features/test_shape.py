"""Tests for gyration tensor shape descriptors."""

import jax.numpy as jnp
import numpy as np

from heimdall.features.shape import gyration_tensor, shape_descriptors, shape_properties
from heimdall.io.parsing.beads import Bead


def test_gyration_tensor_of_a_rod():
    coords = jnp.array([[-1.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
    tensor = gyration_tensor(coords, jnp.ones(2))
    np.testing.assert_allclose(tensor, np.diag([1.0, 0.0, 0.0]), atol=1e-6)


def test_weights_move_the_centre():
    coords = jnp.array([[0.0, 0.0, 0.0], [3.0, 0.0, 0.0]])
    tensor = gyration_tensor(coords, jnp.array([2.0, 1.0]))
    # centre at x=1: (2 * 1 + 1 * 4) / 3
    np.testing.assert_allclose(tensor[0, 0], 2.0, atol=1e-5)


def test_linear_molecule_is_elongated():
    coords = jnp.array([[-2.0, 0.0, 0.0], [0.0, 0.0, 0.0], [2.0, 0.0, 0.0]])
    elongation, planarity = shape_descriptors(coords, jnp.ones(3))
    np.testing.assert_allclose(elongation, 1.0, atol=1e-5)
    np.testing.assert_allclose(planarity, 0.0, atol=1e-5)


def test_square_is_planar_not_elongated():
    coords = jnp.array([[1.0, 1.0, 0.0], [1.0, -1.0, 0.0], [-1.0, -1.0, 0.0], [-1.0, 1.0, 0.0]])
    elongation, planarity = shape_descriptors(coords, jnp.ones(4))
    np.testing.assert_allclose(elongation, 0.0, atol=1e-5)
    np.testing.assert_allclose(planarity, 1.0, atol=1e-5)


def test_shape_properties_per_bead(water):
    beads = [Bead.whole(3), Bead(indexes=(1, 2), weights=(1.0, 1.0))]
    features = shape_properties(water.frame(0), water, beads)
    assert len(features) == 2
    assert set(features[0]) == {"elongation", "planarity"}
    # two points always form a rod
    np.testing.assert_allclose(features[1]["elongation"], 1.0, atol=1e-5)
