"""Quantum-chemical descriptors from the xtb program.

xtb is run as an external executable in a scratch directory. Its standard
output and the ``charges``/``fod`` files it writes are parsed here, and the
per-atom quantities are aggregated over beads.
"""

from __future__ import annotations

import dataclasses
import logging
import pathlib
import re
import subprocess
import tempfile
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

from heimdall.config import DEFAULT_SOLVENT
from heimdall.exceptions import XTBError
from heimdall.features.featuremap import FeatureMap

if TYPE_CHECKING:
  from heimdall.core.containers import Molecule
  from heimdall.io.parsing.beads import Bead
  from heimdall.types import Coordinates

logger = logging.getLogger(__name__)

GEOMETRY_FILENAME = "geometry.xyz"
GAP_PATTERN = re.compile(r"HOMO-LUMO GAP\s+(-?\d+\.\d+)\s+eV")
FUKUI_HEADER = "#        f(+)     f(-)     f(0)"


@dataclasses.dataclass(frozen=True)
class XTBOptions:
  """How xtb is run and which descriptors are derived.

  Attributes:
      variance: Also report the weighted variance of per-atom quantities
          within each bead, as ``<key>var``.
      solvent: ALPB implicit solvent name, or None for gas phase.
      fod: Run the fractional occupation density calculation.
      executable: xtb binary.

  """

  variance: bool = True
  solvent: str | None = DEFAULT_SOLVENT
  fod: bool = True
  executable: str = "xtb"


def write_xyz(coordinates: Coordinates, molecule: Molecule, path: pathlib.Path) -> None:
  """Write the geometry xtb reads."""
  coords = np.asarray(coordinates)
  lines = [str(len(molecule)), "written by heimdall"]
  for symbol, (x, y, z) in zip(molecule.elements, coords, strict=True):
    lines.append(f"{symbol:<3} {x:14.8f} {y:14.8f} {z:14.8f}")
  path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def run_xtb(
  workdir: pathlib.Path,
  molecule: Molecule,
  options: XTBOptions,
  *args: str,
) -> str:
  """Run xtb on ``workdir/geometry.xyz`` and return its standard output.

  Raises:
      XTBError: If the executable is missing or exits with an error.

  """
  command = [
    options.executable,
    GEOMETRY_FILENAME,
    "--chrg",
    str(molecule.charge),
    "--uhf",
    str(molecule.multiplicity - 1),
  ]
  if options.solvent:
    command += ["--alpb", options.solvent]
  command += list(args)
  logger.info("Running %s", " ".join(command))
  try:
    result = subprocess.run(  # noqa: S603
      command,
      cwd=workdir,
      capture_output=True,
      text=True,
      check=False,
    )
  except FileNotFoundError as e:
    msg = f"xtb executable not found: {options.executable}"
    raise XTBError(msg) from e
  if result.returncode != 0:
    tail = "\n".join(result.stderr.strip().splitlines()[-5:])
    msg = f"xtb exited with status {result.returncode}: {tail}"
    raise XTBError(msg)
  return result.stdout


# --- Output parsers ---


def parse_gap(output: str) -> float:
  """HOMO-LUMO gap in eV."""
  match = GAP_PATTERN.search(output)
  if match is None:
    msg = "HOMO-LUMO gap not found in xtb output"
    raise XTBError(msg)
  return float(match.group(1))


def parse_dipole(output: str) -> np.ndarray:
  """Molecular dipole ``[x, y, z, total]`` from the ``full:`` row."""
  lines = iter(output.splitlines())
  for line in lines:
    if line.strip().startswith("molecular dipole:"):
      break
  for line in lines:
    words = line.split()
    if words and words[0] == "full:":
      try:
        return np.array([float(w) for w in words[1:5]], dtype=np.float64)
      except ValueError as e:
        msg = f"Failed to read the molecular dipole from xtb output: {e}"
        raise XTBError(msg) from e
  msg = "Molecular dipole not found in xtb output"
  raise XTBError(msg)


def parse_c6(output: str, n_atoms: int) -> np.ndarray:
  """Per-atom C6 coefficients from the ``C6AA`` table."""
  values: list[float] = []
  reading = False
  for line in output.splitlines():
    words = line.split()
    if not reading:
      reading = "C6AA" in words and words[0] == "#"
      continue
    if not words:
      break
    values.append(float(words[5]))
  if len(values) != n_atoms:
    msg = f"Found C6 coefficients for {len(values)} of {n_atoms} atoms in xtb output"
    raise XTBError(msg)
  return np.array(values, dtype=np.float64)


def parse_fukui(output: str, n_atoms: int) -> np.ndarray:
  """Per-atom Fukui indices, shape (N, 3), columns f(+), f(-), f(0)."""
  rows: list[list[float]] = []
  reading = False
  for line in output.splitlines():
    stripped = line.strip()
    if stripped == FUKUI_HEADER:
      reading = True
    elif reading and (not stripped or stripped.startswith("--")):
      break
    elif reading:
      words = stripped.split()
      rows.append([float(words[1]), float(words[2]), float(words[3])])
  if len(rows) != n_atoms:
    msg = f"Found Fukui indices for {len(rows)} of {n_atoms} atoms in xtb output"
    raise XTBError(msg)
  return np.array(rows, dtype=np.float64)


def parse_ipea(output: str) -> tuple[float, float]:
  """Vertical ionization potential and electron affinity, in eV."""
  ip = ea = None
  for line in output.splitlines():
    stripped = line.strip()
    if stripped.startswith("delta SCC IP (eV)"):
      ip = float(stripped.split()[-1])
    elif stripped.startswith("delta SCC EA (eV)"):
      ea = float(stripped.split()[-1])
  if ip is None or ea is None:
    msg = "IP/EA not found in xtb output"
    raise XTBError(msg)
  return ip, ea


def read_atomic_file(path: pathlib.Path, n_atoms: int) -> np.ndarray:
  """Read a file of one number per atom, like ``charges`` or ``fod``."""
  try:
    values = np.array(path.read_text(encoding="utf-8").split(), dtype=np.float64)
  except (OSError, ValueError) as e:
    msg = f"Failed to read xtb output file {path.name}: {e}"
    raise XTBError(msg) from e
  if len(values) != n_atoms:
    msg = f"{path.name} holds {len(values)} values for {n_atoms} atoms"
    raise XTBError(msg)
  return values


# --- Aggregation ---


def bead_sum(values: np.ndarray, bead: Bead) -> float:
  """Weighted sum of a per-atom quantity over a bead."""
  return float(np.sum(values[list(bead.indexes)] * np.asarray(bead.weights)))


def bead_variance(values: np.ndarray, bead: Bead) -> float:
  """Weighted variance of a per-atom quantity within a bead."""
  weights = np.asarray(bead.weights)
  selected = values[list(bead.indexes)]
  mean = np.sum(selected * weights) / np.sum(weights)
  return float(np.sum(weights * (selected - mean) ** 2) / np.sum(weights))


def _add_atomic(
  features: FeatureMap,
  key: str,
  values: np.ndarray,
  beads: Sequence[Bead],
  variance: bool,
) -> None:
  for i, bead in enumerate(beads):
    features.set(i, key, bead_sum(values, bead))
    if variance:
      features.set(i, f"{key}var", bead_variance(values, bead))


def xtb_properties(
  coordinates: Coordinates,
  molecule: Molecule,
  beads: Sequence[Bead],
  options: XTBOptions | None = None,
) -> FeatureMap:
  """Charges, C6, Fukui indices, FOD, dipole and HOMO-LUMO gap per bead.

  Per-atom quantities are summed over each bead with the bead weights.
  Molecular quantities (dipole, gap) are the same for every bead.

  Raises:
      XTBError: If a calculation fails or its output is incomplete.

  """
  options = options or XTBOptions()
  n_atoms = len(molecule)
  features = FeatureMap.empty(len(beads))
  with tempfile.TemporaryDirectory(prefix="heimdall-xtb-") as scratch:
    workdir = pathlib.Path(scratch)
    write_xyz(coordinates, molecule, workdir / GEOMETRY_FILENAME)

    output = run_xtb(workdir, molecule, options)
    charges = read_atomic_file(workdir / "charges", n_atoms)
    c6 = parse_c6(output, n_atoms)
    dipole = parse_dipole(output)
    gap = parse_gap(output)

    fukui = parse_fukui(run_xtb(workdir, molecule, options, "--vfukui"), n_atoms)

    fod = None
    if options.fod:
      run_xtb(workdir, molecule, options, "--fod")
      fod = read_atomic_file(workdir / "fod", n_atoms)

  _add_atomic(features, "charge", charges, beads, options.variance)
  _add_atomic(features, "c6", c6, beads, options.variance)
  _add_atomic(features, "fukui+", fukui[:, 0], beads, options.variance)
  _add_atomic(features, "fukui-", fukui[:, 1], beads, options.variance)
  _add_atomic(features, "fukui0", fukui[:, 2], beads, options.variance)
  if fod is not None:
    _add_atomic(features, "fod", fod, beads, options.variance)

  for i in range(len(beads)):
    features.set(i, "dipolex", dipole[0])
    features.set(i, "dipoley", dipole[1])
    features.set(i, "dipolez", dipole[2])
    features.set(i, "dipolenorm", dipole[3])
    features.set(i, "homolumogap", gap)
  return features


def xtb_hardness(
  coordinates: Coordinates,
  molecule: Molecule,
  beads: Sequence[Bead],
  options: XTBOptions | None = None,
) -> FeatureMap:
  """Chemical hardness ``(IP - EA) / 2`` in eV, the same for every bead."""
  options = options or XTBOptions()
  with tempfile.TemporaryDirectory(prefix="heimdall-xtb-") as scratch:
    workdir = pathlib.Path(scratch)
    write_xyz(coordinates, molecule, workdir / GEOMETRY_FILENAME)
    ip, ea = parse_ipea(run_xtb(workdir, molecule, options, "--vipea"))
  hardness = (ip - ea) / 2
  logger.debug("IP %.4f eV, EA %.4f eV, hardness %.4f eV", ip, ea, hardness)
  return FeatureMap({"hardness": hardness} for _ in beads)
