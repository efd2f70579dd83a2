"""Common result containers for wfoverlap.

The structures are intentionally small: they name the arrays exchanged
between the interval estimator and the overlap calculator so callers do
not have to remember tuple positions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np


class WaveformLimits(NamedTuple):
    """Per-bin bounds of the central credible region of a waveform.

    Unpacks as ``lower, upper``; both arrays share the waveform's shape.
    """

    lower: np.ndarray
    upper: np.ndarray

    @property
    def width(self) -> np.ndarray:
        """Return ``upper - lower`` for every bin."""

        return self.upper - self.lower


@dataclass(frozen=True)
class OverlapAreas:
    """Per-row areas entering the intersection-over-union ratio."""

    intersection: np.ndarray
    area1: np.ndarray
    area2: np.ndarray

    @property
    def union(self) -> np.ndarray:
        return self.area1 + self.area2 - self.intersection

    @property
    def degenerate(self) -> np.ndarray:
        """Boolean mask of rows whose union area is zero."""

        return self.union == 0
