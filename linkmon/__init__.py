"""Pairwise link-quality monitor for multi-agent simulations."""
from __future__ import annotations

from importlib import metadata as _metadata

try:
    __version__: str = _metadata.version(__name__)
except _metadata.PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = ["config", "simulator", "visibility"]

# Import to register the built-in line-of-sight predicates
from . import visibility
