"""Waveform overlap metric for simulated lidar returns."""

from .core import (
    InvalidParameterError,
    OverlapAreas,
    ShapeMismatchError,
    UndefinedRatioError,
    WaveformLimits,
    compute_limits,
    overlap_areas,
    poisson_quantile,
    waveform_overlap,
)

__version__ = "0.1.0"

__all__ = [
    "InvalidParameterError",
    "OverlapAreas",
    "ShapeMismatchError",
    "UndefinedRatioError",
    "WaveformLimits",
    "compute_limits",
    "overlap_areas",
    "poisson_quantile",
    "waveform_overlap",
]
