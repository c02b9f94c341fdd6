"""Pre-trained solvatochromism classifiers.

Gradient-boosted tree models are read with xgboost (``.json``/``.ubj``);
scikit-learn estimators such as SVMs are read with joblib
(``.joblib``/``.pkl``).
"""

from __future__ import annotations

import dataclasses
import logging
import pathlib
from collections.abc import Mapping
from typing import Any

import joblib
import numpy as np
import xgboost as xgb

from heimdall.config import LABELS
from heimdall.exceptions import ModelError
from heimdall.types import FeatureVector, Probabilities

logger = logging.getLogger(__name__)

XGBOOST_SUFFIXES = (".json", ".ubj")
JOBLIB_SUFFIXES = (".joblib", ".pkl")


@dataclasses.dataclass(frozen=True)
class Prediction:
  """Outcome of classifying one descriptor vector."""

  label_index: int
  label: str
  probabilities: Probabilities


def _one_hot(index: int, n_classes: int) -> np.ndarray:
  probabilities = np.zeros(max(n_classes, index + 1), dtype=np.float64)
  probabilities[index] = 1.0
  return probabilities


class Classifier:
  """A loaded model together with the names of its classes."""

  def __init__(self, model: Any, labels: Mapping[int, str] = LABELS) -> None:  # noqa: ANN401
    self.model = model
    self.labels = dict(labels)

  def predict_proba(self, vector: FeatureVector) -> Probabilities:
    """Class probabilities for one descriptor vector."""
    features = np.asarray(vector, dtype=np.float64).reshape(1, -1)
    if isinstance(self.model, xgb.Booster):
      output = np.asarray(self.model.predict(xgb.DMatrix(features)))
      row = np.atleast_1d(output[0])
      if row.size == 1:
        # multi:softmax models return the class, not probabilities
        return _one_hot(int(round(float(row[0]))), len(self.labels))
      return row.astype(np.float64)
    if hasattr(self.model, "predict_proba"):
      return np.asarray(self.model.predict_proba(features)[0], dtype=np.float64)
    return _one_hot(int(self.model.predict(features)[0]), len(self.labels))

  def predict(self, vector: FeatureVector) -> Prediction:
    """Most probable class for one descriptor vector.

    Raises:
        ModelError: If the model rejects the vector or predicts an unknown
            class.

    """
    try:
      probabilities = self.predict_proba(vector)
    except (ValueError, xgb.core.XGBoostError) as e:
      msg = f"Model failed to evaluate a vector of {len(vector)} descriptors: {e}"
      raise ModelError(msg) from e
    index = int(np.argmax(probabilities))
    classes = getattr(self.model, "classes_", None)
    if classes is not None:
      index = int(classes[index])
    if index not in self.labels:
      msg = f"Model predicted class {index}, which has no label"
      raise ModelError(msg)
    return Prediction(label_index=index, label=self.labels[index], probabilities=probabilities)


def load_classifier(
  model_path: str | pathlib.Path,
  labels: Mapping[int, str] = LABELS,
) -> Classifier:
  """Load a classifier, choosing the backend from the file suffix.

  Raises:
      ModelError: If the file is missing, of an unknown kind, or unreadable.

  """
  path = pathlib.Path(model_path)
  if not path.is_file():
    msg = f"Model file not found: {path}"
    raise ModelError(msg)

  suffix = path.suffix.lower()
  logger.info("Loading classifier from %s", path)
  try:
    if suffix in XGBOOST_SUFFIXES:
      booster = xgb.Booster()
      booster.load_model(str(path))
      return Classifier(booster, labels)
    if suffix in JOBLIB_SUFFIXES:
      return Classifier(joblib.load(path), labels)
  except (OSError, ValueError, EOFError, xgb.core.XGBoostError) as e:
    msg = f"Failed to load model {path}: {e}"
    raise ModelError(msg) from e

  msg = f"Unsupported model format {suffix!r}; expected one of {XGBOOST_SUFFIXES + JOBLIB_SUFFIXES}"
  raise ModelError(msg)
