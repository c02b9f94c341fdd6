"""Heimdall: solvatochromism prediction from molecular geometries.

This package reads geometry files (including the malformed PDB files
LigParGen writes), bead definitions from sectioned input files, computes
quantum-chemical and shape descriptors, and classifies the molecule with a
pre-trained model.
"""

from heimdall.core.containers import Atom, Molecule
from heimdall.exceptions import (
  FormatNotSupportedError,
  HeimdallError,
  MissingFeatureError,
  ModelError,
  ParsingError,
  SectionKeywordError,
  XTBError,
)
from heimdall.io.parsing import (
  Bead,
  LineAction,
  Section,
  check_line,
  load_molecule,
  parse_beads,
  parse_features,
)

__all__ = [
  "Atom",
  "Bead",
  "FormatNotSupportedError",
  "HeimdallError",
  "LineAction",
  "MissingFeatureError",
  "ModelError",
  "Molecule",
  "ParsingError",
  "Section",
  "SectionKeywordError",
  "XTBError",
  "check_line",
  "load_molecule",
  "parse_beads",
  "parse_features",
]
