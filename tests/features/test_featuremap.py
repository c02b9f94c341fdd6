"""Tests for per-bead feature tables."""

import numpy as np
import pytest

from heimdall.exceptions import MissingFeatureError
from heimdall.features.featuremap import FeatureMap


def test_join_merges_per_bead():
    features = FeatureMap([{"a": 1.0}, {"a": 2.0}])
    features.join(FeatureMap([{"b": 3.0}, {"b": 4.0}]))
    assert features[0] == {"a": 1.0, "b": 3.0}
    assert features[1] == {"a": 2.0, "b": 4.0}


def test_join_into_empty_map():
    features = FeatureMap()
    features.join(FeatureMap([{"a": 1.0}]))
    assert len(features) == 1
    assert features[0] == {"a": 1.0}


def test_join_rejects_different_bead_counts():
    with pytest.raises(ValueError, match="2 beads"):
        FeatureMap([{"a": 1.0}]).join(FeatureMap([{}, {}]))


def test_vector_follows_key_order():
    features = FeatureMap([{"a": 1.0, "b": 2.0, "c": 3.0}])
    np.testing.assert_array_equal(features.vector(0, ["c", "a"]), [3.0, 1.0])


def test_vector_missing_key():
    features = FeatureMap([{"a": 1.0}])
    with pytest.raises(MissingFeatureError, match="sasa"):
        features.vector(0, ["a", "sasa"])
    with pytest.raises(KeyError):
        features.vector(0, ["sasa"])


def test_to_csv():
    features = FeatureMap([{"a": 1.0, "b": 0.5}, {"a": 2.0, "b": 0.25}])
    assert features.to_csv(["b", "a"]) == "bead,b,a\n1,0.5,1\n2,0.25,2\n"


def test_keys():
    assert FeatureMap([{"b": 1.0}, {"a": 1.0}]).keys() == ["a", "b"]
