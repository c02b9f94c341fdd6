"""Descriptor computation."""

from heimdall.features.featuremap import FeatureMap
from heimdall.features.sasa import sasa
from heimdall.features.shape import shape_properties
from heimdall.features.xtb import XTBOptions, xtb_hardness, xtb_properties

__all__ = [
  "FeatureMap",
  "XTBOptions",
  "sasa",
  "shape_properties",
  "xtb_hardness",
  "xtb_properties",
]
