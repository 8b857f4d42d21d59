# normal.py
# Standard-normal CDF built on the Abramowitz-Stegun 7.1.26 rational
# approximation of erf (max absolute error ~1.5e-7).
# All functions accept scalars *or* NumPy arrays; 0-d input returns a float.

from __future__ import annotations
import math
import numpy as np

__all__ = ["erf_approx", "standard_normal_cdf", "standard_normal_pdf"]

_P  = 0.3275911
_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429

_SQRT2      = math.sqrt(2.0)
_INV_SQRT2PI = 1.0 / math.sqrt(2.0 * math.pi)


def _as_output(y: np.ndarray):
    if y.ndim == 0:
        return float(y)
    return y


def erf_approx(x):
    """Odd approximation of the error function."""
    x = np.asarray(x, dtype=float)
    sign = np.where(x >= 0.0, 1.0, -1.0)
    ax = np.abs(x)
    t = 1.0 / (1.0 + _P * ax)
    poly = ((((_A5 * t + _A4) * t + _A3) * t + _A2) * t + _A1) * t
    return _as_output(sign * (1.0 - poly * np.exp(-ax * ax)))


def standard_normal_cdf(x):
    """N(x) = 0.5 * (1 + erf(x / sqrt(2)))."""
    x = np.asarray(x, dtype=float)
    return _as_output(0.5 * (1.0 + np.asarray(erf_approx(x / _SQRT2))))


def standard_normal_pdf(x):
    x = np.asarray(x, dtype=float)
    return _as_output(_INV_SQRT2PI * np.exp(-0.5 * x * x))
