"""Solvatochromism classifiers."""

from heimdall.models.classifier import Classifier, Prediction, load_classifier

__all__ = ["Classifier", "Prediction", "load_classifier"]
