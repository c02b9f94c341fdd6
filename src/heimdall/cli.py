"""Command-line solvatochromism predictor.

Usage:
    heimdall [-c/--charge CHARGE] [-m/--multiplicity MULTI] [-v/--verbosity LEVEL]
             [--model PATH] [-i/--input BEADFILE] [--xtb PATH]
             [--solvent NAME | --gas-phase] geometry.pdb/.gro/.xyz
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from collections.abc import Sequence

from heimdall.config import DEFAULT_SOLVENT, DESCRIPTOR_KEYS, DIELECTRIC, LABELS, Settings
from heimdall.core.containers import Molecule
from heimdall.diagnostics import RunDiagnostics
from heimdall.exceptions import HeimdallError
from heimdall.features import FeatureMap, XTBOptions, sasa, shape_properties, xtb_hardness, xtb_properties
from heimdall.io.parsing import Bead, load_molecule, parse_beads, parse_features, validate_beads
from heimdall.models import Prediction, load_classifier

logger = logging.getLogger(__name__)


def compute_descriptors(
  molecule: Molecule,
  beads: Sequence[Bead],
  options: XTBOptions,
) -> FeatureMap:
  """Every descriptor the model uses, for each bead, from the first frame."""
  coordinates = molecule.frame(0)
  features = FeatureMap.empty(len(beads))
  features.join(xtb_properties(coordinates, molecule, beads, options))
  features.join(xtb_hardness(coordinates, molecule, beads, options))
  features.join(shape_properties(coordinates, molecule, beads))
  features.join(sasa(molecule, beads))
  return features


def predict(
  molecule: Molecule,
  model_path: pathlib.Path,
  options: XTBOptions,
) -> Prediction:
  """Classify a molecule from its whole-molecule descriptors."""
  # Only per-molecule features are used, so every atom goes into one bead
  beads = [Bead.whole(len(molecule))]
  features = compute_descriptors(molecule, beads, options)
  vector = features.vector(0, DESCRIPTOR_KEYS)
  return load_classifier(model_path).predict(vector)


def bead_table(molecule: Molecule, input_path: pathlib.Path, options: XTBOptions) -> str:
  """Descriptor table for the beads of an input file, as CSV."""
  beads = parse_beads(input_path)
  if not beads:
    msg = f"No beads defined in {input_path}"
    raise HeimdallError(msg)
  validate_beads(beads, len(molecule))
  keys = parse_features(input_path) or list(DESCRIPTOR_KEYS)
  return compute_descriptors(molecule, beads, options).to_csv(keys)


def build_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(
    prog="heimdall",
    description="Predict the solvatochromism of a molecule from its geometry.",
  )
  parser.add_argument("geometry", help="geometry file (.pdb, .gro, anything else is read as .xyz)")
  parser.add_argument("-c", "--charge", type=int, default=0, help="charge of the molecule")
  parser.add_argument("-m", "--multiplicity", type=int, default=1, help="multiplicity of the molecule")
  parser.add_argument("-v", "--verbosity", type=int, default=1, help="level of verbosity")
  parser.add_argument("--model", type=pathlib.Path, default=None, help="classifier file (default: $HEIMROOT/xgbmodel1.json)")
  parser.add_argument("--xtb", default=None, help="xtb executable (default: $HEIMDALL_XTB or xtb)")
  parser.add_argument("--solvent", default=None, help=f"ALPB solvent for xtb (default: {DEFAULT_SOLVENT}, dielectric {DIELECTRIC:g})")
  parser.add_argument("--gas-phase", action="store_true", help="run xtb without implicit solvent")
  parser.add_argument(
    "-i",
    "--input",
    type=pathlib.Path,
    default=None,
    help="bead input file; also print the descriptors of its beads as CSV",
  )
  return parser


def main(argv: Sequence[str] | None = None) -> int:
  args = build_parser().parse_args(argv)
  settings = Settings.from_env()
  model_path = args.model or settings.model_path
  options = XTBOptions(
    solvent=None if args.gas_phase else (args.solvent or DEFAULT_SOLVENT),
    executable=args.xtb or settings.xtb_executable,
  )
  geometry = args.geometry.strip()

  with RunDiagnostics(args.verbosity) as diagnostics:
    try:
      molecule = load_molecule(geometry)
      molecule = molecule.replace(charge=args.charge, multiplicity=args.multiplicity)
      logger.info("Read %d atoms from %s", len(molecule), geometry)
      prediction = predict(molecule, model_path, options)
      table = bead_table(molecule, args.input, options) if args.input else None
    except HeimdallError as e:
      logger.error("%s", e)  # noqa: TRY400
      return 1

    print(f"{geometry} is predicted to display {prediction.label} solvatochromism")
    if diagnostics.shows(2):
      print("Probabilities:")
      print(
        ", ".join(
          f"{LABELS.get(i, str(i))}: {probability:3.5f}"
          for i, probability in enumerate(prediction.probabilities)
        ),
      )
    if table is not None:
      print(table, end="")
    if diagnostics.warnings:
      print(f"{len(diagnostics.warnings)} warning(s) were issued during the run.", file=sys.stderr)
  return 0


if __name__ == "__main__":
  sys.exit(main())
