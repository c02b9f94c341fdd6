"""Shared test fixtures."""

import pathlib

import numpy as np
import pytest

from heimdall.core.containers import Atom, Molecule

LIGPARGEN_PDB = """\
REMARK LIGPARGEN GENERATED PDB
ATOM      1  C00 UNK     1      -1.034   0.274   0.011
ATOM      2  O01 UNK     1       0.345   0.112  -0.021
HETATM    3 Cl02 UNK     1       1.210  -1.421   0.003
TER
END
"""

STANDARD_PDB = """\
HEADER    SMALL MOLECULE
HETATM    1  C1  LIG A   1      -1.034   0.274   0.011  1.00  0.00           C
HETATM    2  O1  LIG A   1       0.345   0.112  -0.021  1.00  0.00           O
HETATM    3 CL1  LIG A   1       1.210  -1.421   0.003  1.00  0.00          CL
END
"""

WATER_XYZ = """\
3
water
O    0.000000    0.000000    0.117300
H    0.000000    0.757200   -0.469200
H    0.000000   -0.757200   -0.469200
"""

WATER_GRO = """\
water
    3
    1SOL     OW    1   0.000   0.000   0.012
    1SOL    HW1    2   0.000   0.076  -0.047
    1SOL    HW2    3   0.000  -0.076  -0.047
   1.00000   1.00000   1.00000
"""


@pytest.fixture
def write_file(tmp_path: pathlib.Path):
    """Return a helper that writes text to a file in tmp_path."""

    def _write(name: str, content: str) -> pathlib.Path:
        path = tmp_path / name
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def water() -> Molecule:
    """A water molecule with one frame."""
    atoms = [
        Atom(symbol="O", name="O", mol_name="MOL", id=1),
        Atom(symbol="H", name="H", mol_name="MOL", id=2),
        Atom(symbol="H", name="H", mol_name="MOL", id=3),
    ]
    coords = np.array(
        [
            [0.0, 0.0, 0.1173],
            [0.0, 0.7572, -0.4692],
            [0.0, -0.7572, -0.4692],
        ],
    )
    return Molecule.create(atoms, coords)


@pytest.fixture
def ligpargen_pdb() -> str:
    """A three-atom PDB as written by LigParGen."""
    return LIGPARGEN_PDB


@pytest.fixture
def standard_pdb() -> str:
    """The same three atoms as a column-correct PDB."""
    return STANDARD_PDB


@pytest.fixture
def water_xyz() -> str:
    return WATER_XYZ


@pytest.fixture
def water_gro() -> str:
    return WATER_GRO
