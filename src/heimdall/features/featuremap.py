"""Per-bead descriptor tables."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

import numpy as np

from heimdall.config import SEPARATOR
from heimdall.exceptions import MissingFeatureError


class FeatureMap:
  """Descriptor values for a list of beads.

  Row ``i`` maps descriptor names to the value for bead ``i``.
  """

  def __init__(self, rows: Iterable[Mapping[str, float]] = ()) -> None:
    self._rows: list[dict[str, float]] = [dict(row) for row in rows]

  @classmethod
  def empty(cls, n_beads: int) -> FeatureMap:
    return cls({} for _ in range(n_beads))

  def __len__(self) -> int:
    return len(self._rows)

  def __getitem__(self, bead: int) -> dict[str, float]:
    return self._rows[bead]

  def set(self, bead: int, key: str, value: float) -> None:
    self._rows[bead][key] = float(value)

  def keys(self) -> list[str]:
    """Every descriptor name present in any bead, sorted."""
    return sorted({key for row in self._rows for key in row})

  def join(self, other: FeatureMap) -> FeatureMap:
    """Merge ``other`` into this map in place; its values win on clashes.

    An empty map adopts the other map's beads.

    Raises:
        ValueError: If both maps are non-empty and cover a different
            number of beads.

    """
    if not self._rows:
      self._rows = [{} for _ in range(len(other))]
    if len(other) != len(self):
      msg = f"Cannot join a feature map of {len(other)} beads into one of {len(self)}"
      raise ValueError(msg)
    for row, other_row in zip(self._rows, other._rows, strict=True):
      row.update(other_row)
    return self

  def vector(self, bead: int, keys: Sequence[str]) -> np.ndarray:
    """Values of bead ``bead`` in ``keys`` order.

    Raises:
        MissingFeatureError: If a key was never computed for the bead.

    """
    row = self._rows[bead]
    missing = [key for key in keys if key not in row]
    if missing:
      msg = f"Bead {bead} lacks the features: {', '.join(missing)}"
      raise MissingFeatureError(msg)
    return np.array([row[key] for key in keys], dtype=np.float64)

  def to_csv(self, keys: Sequence[str] | None = None, separator: str = SEPARATOR) -> str:
    """Render a header line plus one line per bead."""
    columns = list(keys) if keys is not None else self.keys()
    lines = [separator.join(["bead", *columns])]
    for i in range(len(self)):
      values = self.vector(i, columns)
      lines.append(separator.join([str(i + 1), *(f"{value:.6g}" for value in values)]))
    return "\n".join(lines) + "\n"
