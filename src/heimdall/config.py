"""Constants and run settings for the solvatochromism predictor."""

from __future__ import annotations

import dataclasses
import os
import pathlib

# Descriptor columns, in the order the bundled model was trained on.
DESCRIPTOR_KEYS: tuple[str, ...] = (
  "fukui+var",
  "c6",
  "c6var",
  "charge",
  "chargevar",
  "dipolenorm",
  "dipolex",
  "dipoley",
  "dipolez",
  "elongation",
  "fod",
  "fodvar",
  "fukui+",
  "fukui-",
  "fukui-var",
  "fukui0",
  "fukui0var",
  "hardness",
  "homolumogap",
  "planarity",
  "sasa",
)

LABELS: dict[int, str] = {
  0: "Negative",
  1: "Inverted",
  2: "Positive",
}

# Relative permittivity of the solvent the descriptors are computed in (water)
DIELECTRIC = 80.0
DEFAULT_SOLVENT = "water"
SEPARATOR = ","

MODEL_FILENAME = "xgbmodel1.json"
ROOT_ENV = "HEIMROOT"
XTB_ENV = "HEIMDALL_XTB"


@dataclasses.dataclass(frozen=True)
class Settings:
  """Paths a run needs, usually taken from the environment.

  Attributes:
      model_path: Classifier file.
      xtb_executable: xtb binary, as a path or a name found on ``PATH``.

  """

  model_path: pathlib.Path
  xtb_executable: str = "xtb"

  @classmethod
  def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
    """Build settings from ``HEIMROOT`` and ``HEIMDALL_XTB``.

    Without ``HEIMROOT`` the model is looked up in the working directory.
    """
    env = os.environ if environ is None else environ
    root = pathlib.Path(env.get(ROOT_ENV, "") or ".")
    return cls(
      model_path=root / MODEL_FILENAME,
      xtb_executable=env.get(XTB_ENV, "") or "xtb",
    )
