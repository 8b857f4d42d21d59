"""Side-by-side model comparison.

The analytic and Monte Carlo pricers are independent estimators of the same
price; these helpers run both and summarise how far apart they are, and how
the Monte Carlo error shrinks as the path count grows.
"""

from __future__ import annotations

import numpy as np
from typing import Optional

from .core import MarketInput, LEGACY, DEFAULT_N_PATHS
from .black_scholes import price_analytic
from .monte_carlo import euro_price_mc

__all__ = [
    "cross_validate",
    "convergence_analysis",
]


# ---------------------------------------------------------------------------
# Cross-model benchmarking
# ---------------------------------------------------------------------------

def cross_validate(
    market: MarketInput,
    *,
    n_paths: int = DEFAULT_N_PATHS,
    seed: Optional[int] = 42,
    convention: str = LEGACY,
) -> dict:
    """Price ``market`` with both models.

    Returns
    -------
    dict
        ``"analytic"`` (premium), ``"mc"`` (price, stderr), ``"abs_diff"``,
        ``"rel_diff"`` (vs analytic) and ``"z_score"`` (abs_diff / stderr).
    """
    ref = price_analytic(market, convention=convention).premium
    mc = euro_price_mc(market, n_paths, seed=seed)

    abs_diff = abs(mc.price - ref)
    return {
        "analytic": ref,
        "mc": (mc.price, mc.stderr),
        "abs_diff": abs_diff,
        "rel_diff": abs_diff / ref if ref != 0 else float("nan"),
        "z_score": abs_diff / mc.stderr if mc.stderr > 0 else float("nan"),
    }


# ---------------------------------------------------------------------------
# Convergence analysis
# ---------------------------------------------------------------------------

def convergence_analysis(
    market: MarketInput,
    path_counts: list | np.ndarray,
    *,
    seed: Optional[int] = 42,
    reference: Optional[float] = None,
) -> dict:
    """Analyse Monte Carlo convergence as the number of paths varies.

    Parameters
    ----------
    path_counts : array-like
        Path counts to test.
    reference : float, optional
        True price for error computation.  Default: analytic premium.

    Returns
    -------
    dict
        ``"params"``, ``"prices"``, ``"stderrs"``, ``"errors"``,
        ``"order"`` (estimated from the standard errors, ~0.5).
    """
    path_counts = [int(n) for n in path_counts]

    if reference is None:
        reference = price_analytic(market).premium

    prices, stderrs = [], []
    for n in path_counts:
        res = euro_price_mc(market, n, seed=seed)
        prices.append(res.price)
        stderrs.append(res.stderr)

    errors = [abs(p - reference) for p in prices]

    # stderr ~ C / n^order  => log(se) = -order * log(n) + const
    order = float("nan")
    valid = [(n, s) for n, s in zip(path_counts, stderrs) if s > 0]
    if len(valid) >= 2:
        log_n = np.log([n for n, _ in valid])
        log_s = np.log([s for _, s in valid])
        coeffs = np.polyfit(log_n, log_s, 1)
        order = -float(coeffs[0])

    return {
        "params": path_counts,
        "prices": prices,
        "stderrs": stderrs,
        "errors": errors,
        "order": order,
    }
