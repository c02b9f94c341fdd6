"""Tests for the per-bead SASA."""

import numpy as np

from heimdall.features.sasa import atom_sasa, sasa
from heimdall.io.parsing.beads import Bead


def test_atom_sasa_is_positive(water):
    values = atom_sasa(water)
    assert values.shape == (3,)
    assert np.all(values > 0)


def test_bead_sasa_is_weighted_sum(water):
    per_atom = atom_sasa(water)
    beads = [Bead.whole(3), Bead(indexes=(0, 1), weights=(1.0, 0.5))]
    features = sasa(water, beads)
    np.testing.assert_allclose(features[0]["sasa"], per_atom.sum())
    np.testing.assert_allclose(features[1]["sasa"], per_atom[0] + 0.5 * per_atom[1])
