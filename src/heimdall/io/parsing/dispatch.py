"""Unified dispatch for reading molecular geometries."""

from __future__ import annotations

import pathlib
from typing import Any

# Importing the reader modules registers them.
from heimdall.io.parsing import gro, pdb, xyz  # noqa: F401
from heimdall.io.parsing.registry import FormatNotSupportedError, get_parser
from heimdall.core.containers import Molecule


def _infer_format(path: pathlib.Path) -> str:
  """Infer file format from path suffix. Anything unknown is read as XYZ."""
  suffix = path.suffix.lower()
  if suffix == ".gro":
    return "gro"
  if suffix == ".pdb":
    return "pdb"
  return "xyz"


def load_molecule(
  file_path: str | pathlib.Path,
  file_format: str | None = None,
  **kwargs: Any,  # noqa: ANN401
) -> Molecule:
  """Load a molecule from a geometry file.

  Args:
      file_path: Path to the file. Surrounding whitespace is ignored.
      file_format: Format of the file ("pdb", "gro", "xyz"). If None,
          inferred from the extension.
      **kwargs: Additional arguments passed to specific parsers.

  Returns:
      The molecule, with every frame the file holds.

  Raises:
      FormatNotSupportedError: If ``file_format`` has no registered parser.

  """
  path = pathlib.Path(str(file_path).strip())
  if file_format is None:
    file_format = _infer_format(path)

  parser = get_parser(file_format.lower())
  if not parser:
    msg = f"Failed to read geometry from source: {file_path}. Unsupported file format: {file_format}"
    raise FormatNotSupportedError(msg)
  return parser(path, **kwargs)
