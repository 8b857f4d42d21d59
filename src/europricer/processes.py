# processes.py
# Gaussian sampling and terminal-price generation for Monte Carlo pricing.
#
# Randomness lives in an explicit GaussianSampler handle.  Callers that do
# not pass one share a single process-wide sampler, seeded from OS entropy
# the first time it is needed and never re-seeded afterwards.

from __future__ import annotations
import numpy as np
from typing import Optional, Union

from .core import InvalidInput

__all__ = [
    "GaussianSampler",
    "default_sampler",
    "draw_gaussian",
    "terminal_price",
]

SeedLike = Union[int, np.random.SeedSequence, None]


class GaussianSampler:
    """Normal-variate source wrapping a ``numpy.random.Generator``.

    Parameters
    ----------
    seed : int | SeedSequence | None
        ``None`` draws fresh entropy from the OS.  A fixed int makes every
        draw reproducible.
    """

    def __init__(self, seed: SeedLike = None):
        if isinstance(seed, np.random.SeedSequence):
            self._seed_seq = seed
        else:
            self._seed_seq = np.random.SeedSequence(seed)
        self._rng = np.random.default_rng(self._seed_seq)

    @property
    def seed_sequence(self) -> np.random.SeedSequence:
        return self._seed_seq

    def draw(self, mean: float = 0.0, stddev: float = 1.0,
             size: Optional[int] = None):
        if stddev < 0:
            raise InvalidInput(f"stddev must be non-negative, got {stddev}")
        if size is None:
            return float(self._rng.normal(mean, stddev))
        return self._rng.normal(mean, stddev, size)

    def standard_normal(self, size: int) -> np.ndarray:
        return self._rng.standard_normal(size)

    def spawn_seeds(self, n: int) -> list[np.random.SeedSequence]:
        """Independent child seed sequences (picklable, for worker processes)."""
        return self._seed_seq.spawn(n)

    def spawn(self, n: int) -> list["GaussianSampler"]:
        """``n`` statistically independent child samplers, one per worker."""
        return [GaussianSampler(ss) for ss in self.spawn_seeds(n)]


_default: Optional[GaussianSampler] = None


def default_sampler() -> GaussianSampler:
    """Process-wide sampler, created lazily on first use."""
    global _default
    if _default is None:
        _default = GaussianSampler()
    return _default


def draw_gaussian(mean: float = 0.0, stddev: float = 1.0, *,
                  size: Optional[int] = None,
                  sampler: Optional[GaussianSampler] = None):
    """One N(mean, stddev^2) draw (or ``size`` of them)."""
    if sampler is None:
        sampler = default_sampler()
    return sampler.draw(mean, stddev, size)


def terminal_price(spot, rate, volatility, T, z):
    """
    Exact risk-neutral GBM terminal price:
        S_T = S0 * exp((r - 0.5*sigma^2) T + sigma * sqrt(T) * Z)
    ``z`` may be a scalar or an array of standard-normal draws.
    """
    drift = (rate - 0.5 * volatility * volatility) * T
    vol = volatility * np.sqrt(T)
    S_T = spot * np.exp(drift + vol * np.asarray(z, dtype=float))
    if S_T.ndim == 0:
        return float(S_T)
    return S_T
