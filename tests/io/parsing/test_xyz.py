"""Tests for XYZ reading."""

import numpy as np
import pytest

from heimdall.io.parsing.registry import ParsingError
from heimdall.io.parsing.xyz import load_xyz


def test_single_frame(write_file, water_xyz):
    molecule = load_xyz(write_file("water.xyz", water_xyz))
    assert molecule.elements == ["O", "H", "H"]
    assert [atom.id for atom in molecule.atoms] == [1, 2, 3]
    assert {atom.mol_id for atom in molecule.atoms} == {1}
    assert molecule.coordinates.shape == (1, 3, 3)
    np.testing.assert_allclose(molecule.frame(0)[1], [0.0, 0.7572, -0.4692])


def test_multiple_frames(write_file, water_xyz):
    molecule = load_xyz(write_file("traj.xyz", water_xyz + water_xyz))
    assert molecule.n_frames == 2


def test_lowercase_symbols_are_normalized(write_file):
    molecule = load_xyz(write_file("cl.xyz", "1\n\nCL 0.0 0.0 0.0\n"))
    assert molecule.elements == ["Cl"]


def test_truncated_frame(write_file):
    with pytest.raises(ParsingError, match="ends after 1 of 3"):
        load_xyz(write_file("short.xyz", "3\nwater\nO 0.0 0.0 0.0\n"))


def test_bad_coordinate(write_file):
    with pytest.raises(ParsingError, match="line 3"):
        load_xyz(write_file("bad.xyz", "1\n\nO 0.0 zero 0.0\n"))


def test_frames_must_match(write_file, water_xyz):
    other = "3\nnot water\nC 0.0 0.0 0.0\nH 1.0 0.0 0.0\nH 0.0 1.0 0.0\n"
    with pytest.raises(ParsingError, match="Frame 2"):
        load_xyz(write_file("mixed.xyz", water_xyz + other))


def test_empty_file(write_file):
    with pytest.raises(ParsingError, match="No frames"):
        load_xyz(write_file("empty.xyz", ""))
