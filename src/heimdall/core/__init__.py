"""Core data containers."""

from heimdall.core.containers import Atom, Molecule

__all__ = ["Atom", "Molecule"]
