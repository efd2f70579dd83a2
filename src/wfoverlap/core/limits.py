"""Poisson credible intervals for sampled waveforms.

Every bin of a waveform holds the expected number of photons for that
time bin.  Treating the value as the rate of a Poisson distribution, the
central ``(1 - alpha)`` region is bounded by the ``alpha / 2`` and
``1 - alpha / 2`` quantiles.  Bins are independent so the whole array is
evaluated in one vectorised call.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from scipy.stats import poisson

from ..config import Settings
from ..types import WaveformLimits

logger = logging.getLogger(__name__)


class InvalidParameterError(ValueError):
    """Raised when ``alpha`` or a Poisson rate is outside its domain."""


def validate_alpha(alpha: float) -> float:
    """Return ``alpha`` as a float, raising if it is not inside ``(0, 1)``."""

    try:
        value = float(alpha)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"alpha must be a real number, got {alpha!r}") from exc
    if not 0.0 < value < 1.0:
        raise InvalidParameterError(f"alpha must lie strictly between 0 and 1, got {value}")
    return value


def poisson_quantile(probability: float | np.ndarray, rate: float | np.ndarray | Sequence[float]) -> np.ndarray:
    """Inverse CDF of the Poisson distribution.

    Returns the smallest integer ``k`` (as a float) with
    ``P(X <= k; rate) >= probability``.  Arguments broadcast against each
    other.  A zero rate puts all of its mass at ``0`` so the quantile is
    ``0`` for every probability.

    Parameters
    ----------
    probability:
        Cumulative probability in ``[0, 1]``.
    rate:
        Non-negative Poisson rate(s).

    Returns
    -------
    numpy.ndarray
        Quantiles with the broadcast shape of the inputs.
    """

    p = np.asarray(probability, dtype=float)
    mu = np.asarray(rate, dtype=float)
    if np.any((p < 0.0) | (p > 1.0)) or np.any(np.isnan(p)):
        raise InvalidParameterError("probability must lie in [0, 1]")
    if np.any(~np.isfinite(mu)) or np.any(mu < 0.0):
        raise InvalidParameterError("Poisson rates must be finite and non-negative")

    zero = mu == 0.0
    # poisson.ppf can return nan at mu == 0; zero rates are masked below.
    out = poisson.ppf(p, np.where(zero, 1.0, mu))
    return np.where(zero, 0.0, out)


def compute_limits(
    waveform: Sequence[Sequence[float]] | np.ndarray,
    alpha: float | None = None,
    *,
    settings: Settings | None = None,
) -> WaveformLimits:
    """Compute the per-bin credible interval of ``waveform``.

    Parameters
    ----------
    waveform:
        Array of non-negative expected photon counts of any shape.
    alpha:
        Significance level; ``alpha / 2`` of the probability mass is
        excluded from each tail.  Defaults to ``settings.overlap.alpha``.
    settings:
        Optional :class:`~wfoverlap.config.Settings` providing defaults.

    Returns
    -------
    WaveformLimits
        ``(lower, upper)`` arrays with the same shape as ``waveform``.
    """

    if alpha is None:
        if settings is None:
            settings = Settings()
        alpha = settings.overlap.alpha
    alpha = validate_alpha(alpha)

    wf = np.asarray(waveform, dtype=float)
    lower = poisson_quantile(alpha / 2.0, wf)
    upper = poisson_quantile(1.0 - alpha / 2.0, wf)
    logger.debug("computed limits for waveform of shape %s (alpha=%g)", wf.shape, alpha)
    return WaveformLimits(lower=lower, upper=upper)


__all__ = ["InvalidParameterError", "compute_limits", "poisson_quantile", "validate_alpha"]
