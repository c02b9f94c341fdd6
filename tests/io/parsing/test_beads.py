"""Tests for bead and feature extraction."""

import pytest

from heimdall.io.parsing.beads import Bead, parse_beads, parse_features, validate_beads
from heimdall.io.parsing.registry import ParsingError
from heimdall.io.parsing.sections import Section

BEAD_INPUT = """\
# beads for a small test molecule
BEADS
1 3/2,7
2 5
3 3/2,4,6
VSITES
BONDS
1 2
FEATURES
X alpha
X beta
"""


def test_fractional_and_whole_atoms(write_file):
    beads = parse_beads(write_file("beads.inp", BEAD_INPUT))
    assert beads[0].indexes == (2, 6)
    assert beads[0].weights == (0.5, 1.0)
    assert beads[1].indexes == (4,)
    assert beads[1].weights == (1.0,)


def test_one_bead_per_line_in_order(write_file):
    beads = parse_beads(write_file("beads.inp", BEAD_INPUT))
    assert len(beads) == 3
    assert beads[2].indexes == (2, 3, 5)
    assert beads[2].weights == (0.5, 1.0, 1.0)
    for bead in beads:
        assert len(bead.indexes) == len(bead.weights)


def test_header_is_not_data(write_file):
    path = write_file("beads.inp", "BEADS\nBONDS\n")
    assert parse_beads(path) == []


def test_beads_under_features_section(write_file):
    """Older inputs kept the bead lines under FEATURES."""
    path = write_file("old.inp", "BEADS\nFEATURES\nX 3/2,7\nX 5\n")
    beads = parse_beads(path, Section.FEATURES)
    assert [bead.indexes for bead in beads] == [(2, 6), (4,)]
    assert [bead.weights for bead in beads] == [(0.5, 1.0), (1.0,)]
    assert parse_beads(path, Section.BEADS) == []


def test_missing_section_gives_no_beads(write_file):
    assert parse_beads(write_file("nobeads.inp", "FEATURES\nX alpha\n")) == []


def test_bad_denominator_reports_line(write_file):
    path = write_file("bad.inp", "BEADS\n1 1,2/abc\n")
    with pytest.raises(ParsingError, match="1 field in the 2 line"):
        parse_beads(path)


def test_zero_denominator(write_file):
    with pytest.raises(ParsingError):
        parse_beads(write_file("zero.inp", "BEADS\n1 2/0\n"))


def test_bad_atom_id_reports_line(write_file):
    path = write_file("bad.inp", "BEADS\n1 1\n2 x/2\n")
    with pytest.raises(ParsingError, match="bead id: x in line 3"):
        parse_beads(path)


def test_missing_payload(write_file):
    with pytest.raises(ParsingError, match="Line 2"):
        parse_beads(write_file("short.inp", "BEADS\n1\n"))


def test_features_in_order(write_file):
    path = write_file("features.inp", "FEATURES\nX alpha\nX beta\n")
    assert parse_features(path) == ["alpha", "beta"]


def test_features_after_other_sections(write_file):
    assert parse_features(write_file("beads.inp", BEAD_INPUT)) == ["alpha", "beta"]


def test_features_keep_duplicates(write_file):
    path = write_file("features.inp", "FEATURES\n1 sasa\n2 sasa\n")
    assert parse_features(path) == ["sasa", "sasa"]


def test_empty_feature_section(write_file):
    assert parse_features(write_file("features.inp", "BEADS\n1 1\nFEATURES\n")) == []


def test_bead_is_frozen():
    bead = Bead(indexes=(0,), weights=(1.0,))
    with pytest.raises(AttributeError):
        bead.indexes = (1,)  # type: ignore[misc]


def test_whole_bead():
    bead = Bead.whole(3)
    assert bead.indexes == (0, 1, 2)
    assert bead.weights == (1.0, 1.0, 1.0)


def test_validate_beads():
    validate_beads([Bead(indexes=(0, 2), weights=(1.0, 0.5))], 3)
    with pytest.raises(ParsingError, match="atom 4"):
        validate_beads([Bead(indexes=(3,), weights=(1.0,))], 3)


def test_space_after_comma_splits_the_payload(write_file):
    # Only the second whitespace field is read, so "3/2," ends in an empty id
    path = write_file("spaced.inp", "BEADS\n3 3/2, 4,6\n")
    with pytest.raises(ParsingError, match="bead id:  in line 2"):
        parse_beads(path)


@pytest.mark.parametrize("atom_id", ["0", "-2", "0/2"])
def test_atom_ids_start_at_one(write_file, atom_id):
    path = write_file("zero_id.inp", f"BEADS\n1 1\n2 2,{atom_id}\n")
    with pytest.raises(ParsingError, match="line 3"):
        parse_beads(path)
