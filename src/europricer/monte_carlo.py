# europricer/monte_carlo.py

from __future__ import annotations
import logging
import math
import numbers
import numpy as np
from concurrent.futures import ProcessPoolExecutor
from typing import Optional

from .core import (
    MarketInput, MCResult, InvalidInput, DEFAULT_N_PATHS, DEFAULT_CHUNK_SIZE,
    check_market,
)
from .processes import GaussianSampler, default_sampler, terminal_price

logger = logging.getLogger(__name__)

# ---- helper: one simulation chunk (no path storage, only terminal S_T) ----

def _payoff_sumstats(Z: np.ndarray, *, spot: float, strike: float, T: float,
                     r: float, sigma: float, is_call: bool):
    """
    Map standard-normal draws Z to undiscounted payoffs and return the
    sufficient statistics needed to aggregate chunks:
        n, sumX, sumX2
    """
    ST = terminal_price(spot, r, sigma, T, Z)
    if is_call:
        payoff = np.maximum(ST - strike, 0.0)
    else:
        payoff = np.maximum(strike - ST, 0.0)
    return (payoff.size, float(payoff.sum()), float((payoff * payoff).sum()))


def _mc_chunk_sumstats(n: int, *, seed: np.random.SeedSequence, **params):
    """Worker entry point: own generator per chunk, no shared state."""
    if n <= 0:
        return (0, 0.0, 0.0)
    Z = GaussianSampler(seed).standard_normal(n)
    return _payoff_sumstats(Z, **params)


def _aggregate_stats(stats_list):
    n = sum(s[0] for s in stats_list)
    sumX  = sum(s[1] for s in stats_list)
    sumX2 = sum(s[2] for s in stats_list)
    return n, sumX, sumX2


def _check_count(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidInput(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidInput(f"{name} must be positive, got {value}")
    return int(value)


def _resolve_sampler(sampler: Optional[GaussianSampler], seed) -> GaussianSampler:
    if sampler is not None:
        return sampler
    if seed is not None:
        return GaussianSampler(seed)
    return default_sampler()


def euro_price_mc(
    market: MarketInput,
    num_paths: int = DEFAULT_N_PATHS, *,
    sampler: Optional[GaussianSampler] = None,
    seed: Optional[int] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    n_workers: int = 1,
) -> MCResult:
    """
    Memory-light European option Monte-Carlo pricer (terminal-only).
    Returns an ``MCResult`` (price, stderr, n_paths).

    - Streams in chunks to cap memory.
    - No variance reduction: plain discounted sample mean.
    - Optional process-level parallelism; every chunk gets its own
      generator spawned from ``sampler``.

    Randomness comes from ``sampler`` if given, else a fresh sampler seeded
    with ``seed``, else the process-wide default sampler.
    """
    n_paths = _check_count(num_paths, "num_paths")
    chunk_size = _check_count(chunk_size, "chunk_size")
    n_workers = _check_count(n_workers, "n_workers")
    S0, K, T = market.spot, market.strike, market.time_to_maturity
    r, sigma = market.rate, market.volatility
    check_market(S0, K, sigma, T, r)
    params = dict(spot=S0, strike=K, T=T, r=r, sigma=sigma, is_call=market.is_call)

    src = _resolve_sampler(sampler, seed)

    # plan chunks
    chunks = []
    remaining = n_paths
    while remaining > 0:
        m = min(chunk_size, remaining)
        chunks.append(m)
        remaining -= m
    logger.debug("MC %s: %d paths in %d chunk(s), %d worker(s)",
                 market.kind, n_paths, len(chunks), n_workers)

    # serial or parallel execution
    stats_list = []
    if n_workers <= 1:
        for m in chunks:
            Z = src.standard_normal(m)
            stats_list.append(_payoff_sumstats(Z, **params))
    else:
        with ProcessPoolExecutor(max_workers=n_workers) as ex:
            futs = [
                ex.submit(_mc_chunk_sumstats, m, seed=ss, **params)
                for m, ss in zip(chunks, src.spawn_seeds(len(chunks)))
            ]
            # submission order keeps seeded sums bit-identical
            stats_list = [f.result() for f in futs]

    n, sumX, sumX2 = _aggregate_stats(stats_list)
    df = math.exp(-r * T)

    meanX = sumX / n
    if n > 1:
        varX = max(0.0, (sumX2 - n * meanX * meanX) / (n - 1))
        se = df * math.sqrt(varX / n)
    else:
        se = float("nan")

    return MCResult(price=float(df * meanX), stderr=float(se), n_paths=n)


def price_monte_carlo(
    market: MarketInput,
    num_paths: int = DEFAULT_N_PATHS, *,
    sampler: Optional[GaussianSampler] = None,
    seed: Optional[int] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    n_workers: int = 1,
) -> float:
    """Discounted average payoff over ``num_paths`` GBM terminal draws."""
    return euro_price_mc(
        market, num_paths, sampler=sampler, seed=seed,
        chunk_size=chunk_size, n_workers=n_workers,
    ).price
