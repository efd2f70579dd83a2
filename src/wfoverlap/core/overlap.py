"""Intersection-over-union overlap of two waveforms.

The overlap metric compares two simulated waveforms (mean photon counts
per time bin, one waveform per row).  For each bin the Poisson credible
intervals of both waveforms are intersected; the clipped intersection
widths are summed along the row and divided by the summed union width:

.. math::

   O = \\frac{\\sum_j I_j}{\\sum_j (u^1_j - l^1_j) + \\sum_j (u^2_j - l^2_j) - \\sum_j I_j}

with :math:`I_j = \\max(\\min(u^1_j, u^2_j) - \\max(l^1_j, l^2_j), 0)`.

References
----------
Romanczyk, P., van Aardt, J., Cawse-Nicholson, K., Kelbe, D., McGlinchy, J.
and Krause, K. (2013). Assessing the Impact of Broadleaf Tree Structure on
Airborne Full-waveform Small-footprint Lidar Signals Through Simulation.
Canadian Journal of Remote Sensing, 39 (S1), S60-S72.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from ..config import Settings
from ..types import OverlapAreas
from .limits import compute_limits, validate_alpha

logger = logging.getLogger(__name__)

ArrayLike = Sequence[Sequence[float]] | Sequence[float] | np.ndarray


class ShapeMismatchError(ValueError):
    """Raised when the two waveforms do not have identical shapes."""


class UndefinedRatioError(ArithmeticError):
    """Raised for rows whose union area is zero when ``degenerate="raise"``."""

    def __init__(self, rows: Sequence[int]) -> None:
        self.rows = [int(r) for r in rows]
        super().__init__(
            f"overlap is undefined (0/0) for rows with zero union area "
            f"(all intervals zero-width) {self.rows}"
        )


def _as_rows(wf1: ArrayLike, wf2: ArrayLike) -> tuple[np.ndarray, np.ndarray]:
    """Return both waveforms as 2-D float arrays after checking shapes."""

    a = np.asarray(wf1, dtype=float)
    b = np.asarray(wf2, dtype=float)
    if a.ndim != b.ndim or a.shape != b.shape:
        raise ShapeMismatchError(
            f"wf1 and wf2 must be the same size, got {a.shape} and {b.shape}"
        )
    if a.ndim > 2:
        raise ValueError(f"waveforms must be 1-D or 2-D arrays, got {a.ndim} dimensions")
    return np.atleast_2d(a), np.atleast_2d(b)


def overlap_areas(
    wf1: ArrayLike,
    wf2: ArrayLike,
    alpha: float | None = None,
    *,
    settings: Settings | None = None,
) -> OverlapAreas:
    """Return the per-row intersection and interval areas of two waveforms.

    Rows are independent waveforms and columns are time bins.  A 1-D input
    is treated as a single row.  The shapes are checked before any
    interval is computed.
    """

    a, b = _as_rows(wf1, wf2)

    if alpha is None:
        if settings is None:
            settings = Settings()
        alpha = settings.overlap.alpha
    alpha = validate_alpha(alpha)

    l1, u1 = compute_limits(a, alpha, settings=settings)
    l2, u2 = compute_limits(b, alpha, settings=settings)

    diff = np.minimum(u1, u2) - np.maximum(l1, l2)
    diff[diff <= 0] = 0.0

    return OverlapAreas(
        intersection=diff.sum(axis=1),
        area1=(u1 - l1).sum(axis=1),
        area2=(u2 - l2).sum(axis=1),
    )


def overlap_ratio(areas: OverlapAreas, degenerate: str = "nan") -> np.ndarray:
    """Divide intersection by union for every row of ``areas``.

    ``degenerate`` controls rows with a zero union area: ``"nan"`` leaves
    NaN in those positions, ``"raise"`` raises :class:`UndefinedRatioError`.
    """

    if degenerate not in {"nan", "raise"}:
        raise ValueError(f"degenerate must be 'nan' or 'raise', got {degenerate!r}")

    union = areas.union
    bad = np.flatnonzero(union == 0)
    if bad.size:
        if degenerate == "raise":
            raise UndefinedRatioError(bad)
        logger.debug("overlap undefined for %d row(s): %s", bad.size, bad.tolist())

    with np.errstate(invalid="ignore", divide="ignore"):
        return areas.intersection / union


def waveform_overlap(
    wf1: ArrayLike,
    wf2: ArrayLike,
    alpha: float | None = None,
    *,
    settings: Settings | None = None,
    degenerate: str | None = None,
) -> np.ndarray:
    """Compute the waveform overlap between two waveforms.

    Waveform overlap is the intersection divided by the union of the
    ``(1 - alpha) * 100%`` central Poisson regions of both waveforms,
    aggregated across the bins of each row.

    Parameters
    ----------
    wf1, wf2:
        Waveforms of identical shape.  Rows are independent waveforms and
        columns are time bins; a 1-D array is a single waveform.
    alpha:
        Significance level in ``(0, 1)``.  Defaults to
        ``settings.overlap.alpha`` (0.05).
    settings:
        Optional :class:`~wfoverlap.config.Settings` providing defaults.
    degenerate:
        Policy for rows with zero union area, i.e. every interval in the row
        is zero-width.  This covers all-zero rows and rows of small rates
        such as 0.01, whose 97.5% Poisson quantile is 0.  Defaults to
        ``settings.overlap.degenerate``.

    Returns
    -------
    numpy.ndarray
        Flat array of shape ``(n_rows,)``, not an ``(n_rows, 1)`` column;
        use ``result[:, None]`` for a column.  Values lie in ``[0, 1]`` for
        rows with a nonzero union and are NaN for degenerate rows under the
        ``"nan"`` policy.

    Raises
    ------
    ShapeMismatchError
        If ``wf1`` and ``wf2`` differ in dimensionality or extent.
    ValueError
        If the waveforms have more than two dimensions.
    InvalidParameterError
        If ``alpha`` is outside ``(0, 1)`` or a waveform holds a negative rate.
    UndefinedRatioError
        For degenerate rows under the ``"raise"`` policy.
    """

    if degenerate is None:
        if settings is None:
            settings = Settings()
        degenerate = settings.overlap.degenerate

    areas = overlap_areas(wf1, wf2, alpha, settings=settings)
    return overlap_ratio(areas, degenerate)


__all__ = [
    "ShapeMismatchError",
    "UndefinedRatioError",
    "overlap_areas",
    "overlap_ratio",
    "waveform_overlap",
]
