"""Parsing utilities for geometry and bead input files."""

from heimdall.io.parsing.beads import Bead, parse_beads, parse_features, validate_beads
from heimdall.io.parsing.dispatch import load_molecule
from heimdall.io.parsing.registry import (
  FormatNotSupportedError,
  HeimdallError,
  ParserFunc,
  ParsingError,
  SectionKeywordError,
  register_parser,
)
from heimdall.io.parsing.sections import LineAction, Section, check_line, iter_section

__all__ = [
  "Bead",
  "FormatNotSupportedError",
  "HeimdallError",
  "LineAction",
  "ParserFunc",
  "ParsingError",
  "Section",
  "SectionKeywordError",
  "check_line",
  "iter_section",
  "load_molecule",
  "parse_beads",
  "parse_features",
  "register_parser",
  "validate_beads",
]
