"""Format name to molecule reader registry.

The exceptions raised by readers are re-exported here so parser modules can
import everything they need from one place.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from heimdall.exceptions import (
  FormatNotSupportedError,
  HeimdallError,
  ParsingError,
  SectionKeywordError,
)

if TYPE_CHECKING:
  from heimdall.core.containers import Molecule

__all__ = [
  "FormatNotSupportedError",
  "HeimdallError",
  "ParserFunc",
  "ParsingError",
  "SectionKeywordError",
  "get_parser",
  "list_supported_formats",
  "register_parser",
]

logger = logging.getLogger(__name__)

# (file_path: str | pathlib.Path, **kwargs) -> Molecule
ParserFunc = Callable[..., "Molecule"]

_READERS: dict[str, ParserFunc] = {}


def register_parser(formats: Iterable[str]) -> Callable[[ParserFunc], ParserFunc]:
  """Register a molecule reader for the given format names.

  Format names are case-insensitive. Registering a name twice replaces the
  earlier reader.
  """

  def decorator(fn: ParserFunc) -> ParserFunc:
    for fmt in formats:
      name = fmt.lower()
      if name in _READERS:
        logger.debug("Replacing reader for %s with %s", name, fn.__qualname__)
      _READERS[name] = fn
    return fn

  return decorator


def get_parser(fmt: str) -> ParserFunc | None:
  """Reader registered for ``fmt``, or None."""
  return _READERS.get(fmt.lower())


def list_supported_formats() -> list[str]:
  return sorted(_READERS)
