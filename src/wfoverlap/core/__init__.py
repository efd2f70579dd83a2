"""Core algorithms for the waveform overlap metric."""

from ..types import OverlapAreas, WaveformLimits
from .limits import InvalidParameterError, compute_limits, poisson_quantile, validate_alpha
from .overlap import (
    ShapeMismatchError,
    UndefinedRatioError,
    overlap_areas,
    overlap_ratio,
    waveform_overlap,
)

__all__ = [
    "InvalidParameterError",
    "OverlapAreas",
    "ShapeMismatchError",
    "UndefinedRatioError",
    "WaveformLimits",
    "compute_limits",
    "overlap_areas",
    "overlap_ratio",
    "poisson_quantile",
    "validate_alpha",
    "waveform_overlap",
]
