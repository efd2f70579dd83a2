from __future__ import annotations

"""Reading and writing the arrays handled by the command line tool."""

from pathlib import Path

import numpy as np

from .types import WaveformLimits


def load_waveform(path: str | Path) -> np.ndarray:
    """Load a waveform array from a ``.npy`` or ``.csv`` file.

    CSV files hold one waveform per line with comma separated bins.  The
    result is always at least two-dimensional so a single-line CSV yields
    one row.
    """

    p = Path(path)
    if p.suffix.lower() == ".csv":
        data = np.loadtxt(p, delimiter=",", ndmin=2)
    elif p.suffix.lower() == ".npy":
        data = np.load(p)
    else:
        raise ValueError(f"unsupported waveform file type: {p.suffix or p.name}")
    return np.asarray(data, dtype=float)


def save_overlap(path: str | Path, overlap: np.ndarray) -> Path:
    """Persist per-row overlap values as ``.npy`` or single-column ``.csv``."""

    p = Path(path)
    values = np.asarray(overlap, dtype=float).reshape(-1)
    if p.suffix.lower() == ".csv":
        np.savetxt(p, values[:, None], delimiter=",")
    else:
        np.save(p, values)
    return p


def save_limits(path: str | Path, limits: WaveformLimits) -> Path:
    """Write ``lower``/``upper`` arrays to an ``.npz`` archive."""

    p = Path(path)
    np.savez(p, lower=limits.lower, upper=limits.upper)
    return p


__all__ = ["load_waveform", "save_limits", "save_overlap"]
