"""Exception hierarchy for heimdall."""


class HeimdallError(Exception):
  """Base class for all Heimdall exceptions."""


class ParsingError(HeimdallError):
  """Error raised when parsing fails."""


class SectionKeywordError(ParsingError):
  """Error raised when a caller asks for a section the input format lacks."""


class FormatNotSupportedError(HeimdallError):
  """Error raised when file format is not supported."""


class MissingFeatureError(HeimdallError, KeyError):
  """Error raised when a descriptor needed downstream was never computed."""

  def __str__(self) -> str:
    return str(self.args[0]) if self.args else ""


class XTBError(HeimdallError):
  """Error raised when an xtb calculation fails or its output cannot be read."""


class ModelError(HeimdallError):
  """Error raised when a classifier cannot be loaded or evaluated."""
