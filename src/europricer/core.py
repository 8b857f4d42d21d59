from __future__ import annotations
import math
from dataclasses import dataclass, asdict, replace as _replace


class InvalidInput(ValueError):
    """Raised when market/contract inputs violate a pricing precondition."""


CALL = "call"
PUT  = "put"

# Greeks conventions
LEGACY   = "legacy"     # CDF-weighted gamma/vega/theta
TEXTBOOK = "textbook"   # density-weighted gamma/vega/theta

DAYS_PER_YEAR      = 365.2425   # Gregorian average
DEFAULT_N_PATHS    = 100_000
DEFAULT_CHUNK_SIZE = 100_000


def days_to_expiry(T: float) -> int:
    if not math.isfinite(T):
        raise InvalidInput(f"time_to_maturity must be finite, got {T}")
    return int(round(T * DAYS_PER_YEAR))


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class MarketInput:
    """Market + contract parameters shared by both pricers.

    Parameters
    ----------
    spot : float
        Current underlying price.
    strike : float
        Exercise price.
    rate : float
        Continuously-compounded risk-free rate (may be zero or negative).
    volatility : float
        Annualised volatility of log-returns.
    time_to_maturity : float
        Time to expiry in years.
    is_call : bool
        ``True`` for a call, ``False`` for a put.
    """
    spot: float
    strike: float
    rate: float
    volatility: float
    time_to_maturity: float
    is_call: bool = True

    def __post_init__(self):
        check_market(self.spot, self.strike, self.volatility,
                     self.time_to_maturity, self.rate)

    @property
    def kind(self) -> str:
        return CALL if self.is_call else PUT

    def replace(self, **changes) -> "MarketInput":
        """Copy with some fields changed (re-validated)."""
        return _replace(self, **changes)


def check_market(spot: float, strike: float, volatility: float, T: float,
                 rate: float = 0.0) -> None:
    for name, value in (("spot", spot), ("strike", strike), ("rate", rate),
                        ("volatility", volatility), ("time_to_maturity", T)):
        if not math.isfinite(value):
            raise InvalidInput(f"{name} must be finite, got {value}")
    if not spot > 0:
        raise InvalidInput(f"spot must be positive, got {spot}")
    if not strike > 0:
        raise InvalidInput(f"strike must be positive, got {strike}")
    if not volatility > 0:
        raise InvalidInput(f"volatility must be positive, got {volatility}")
    if not T > 0:
        raise InvalidInput(f"time_to_maturity must be positive, got {T}")


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PricingResult:
    """Analytic premium plus Greeks.

    ``theta`` is per year, ``vega`` is dPrice/dSigma in absolute units.
    ``implied_volatility`` echoes the input volatility unless a market
    premium was supplied to the pricer.
    """
    premium: float
    days_to_expiry: int
    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float
    implied_volatility: float
    intrinsic_value: float

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class MCResult:
    """Monte Carlo estimate with its standard error.

    ``stderr`` is NaN when only one path was simulated.
    """
    price: float
    stderr: float
    n_paths: int

    def confidence_interval(self, level: float = 0.95) -> tuple[float, float]:
        """Normal-approximation two-sided interval around ``price``."""
        if not 0.0 < level < 1.0:
            raise InvalidInput(f"level must be in (0, 1), got {level}")
        if not math.isfinite(self.stderr):
            raise InvalidInput(f"no confidence interval from {self.n_paths} path(s)")
        from scipy.stats import norm
        half = float(norm.ppf(0.5 + 0.5 * level)) * self.stderr
        return self.price - half, self.price + half
