"""Type definitions for heimdall."""

from __future__ import annotations

import numpy as np
from jaxtyping import Array, Float

ArrayLike = Array | np.ndarray

# Structural Types
Coordinates = Float[ArrayLike, "num_atoms 3"]
Frames = Float[ArrayLike, "num_frames num_atoms 3"]
AtomWeights = Float[ArrayLike, "num_atoms"]
GyrationTensor = Float[ArrayLike, "3 3"]
Elements = list[str]

# Feature Types
FeatureVector = Float[np.ndarray, "num_features"]
Probabilities = Float[np.ndarray, "num_classes"]
