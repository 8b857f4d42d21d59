from __future__ import annotations
import logging
import math
from math import log, sqrt, exp
from typing import Dict

from .core import (
    MarketInput, PricingResult, InvalidInput, CALL, LEGACY, TEXTBOOK,
    check_market, days_to_expiry,
)
from .normal import standard_normal_cdf as _N, standard_normal_pdf as _n

logger = logging.getLogger(__name__)

_CONVENTIONS = (LEGACY, TEXTBOOK)


def _d1_d2(S, K, T, r, sigma):
    check_market(S, K, sigma, T, r)
    rt = sigma * sqrt(T)
    d1 = (log(S / K) + (r + 0.5 * sigma * sigma) * T) / rt
    d2 = d1 - rt
    return d1, d2


def _premium(S, K, T, r, sigma, is_call) -> float:
    d1, d2 = _d1_d2(S, K, T, r, sigma)
    disc_r = exp(-r * T)
    if is_call:
        return S * _N(d1) - K * disc_r * _N(d2)
    return K * disc_r * _N(-d2) - S * _N(-d1)


def price(market: MarketInput) -> float:
    return _premium(market.spot, market.strike, market.time_to_maturity,
                    market.rate, market.volatility, market.is_call)


def greeks(market: MarketInput, convention: str = LEGACY) -> Dict[str, float]:
    """Returns greeks with sigma in absolute units (vega is dPrice/dSigma, not per 1%).

    ``convention="legacy"`` weights gamma, vega and the theta diffusion term
    with N(d1); ``"textbook"`` uses the density n(d1).
    """
    if convention not in _CONVENTIONS:
        raise InvalidInput(f"convention must be one of {_CONVENTIONS}, got {convention!r}")
    S, K, T = market.spot, market.strike, market.time_to_maturity
    r, sigma = market.rate, market.volatility
    d1, d2 = _d1_d2(S, K, T, r, sigma)
    g_d1   = _N(d1) if convention == LEGACY else _n(d1)
    N_d1   = _N(d1)
    disc_r = math.exp(-r * T)
    srt    = sigma * math.sqrt(T)

    # Common
    gamma = g_d1 / (S * srt)
    vega  = S * g_d1 * math.sqrt(T)
    decay = -S * g_d1 * sigma / (2 * math.sqrt(T))

    if market.is_call:
        delta = N_d1
        theta = decay - r * K * disc_r * _N(d2)
        rho   = K * T * disc_r * _N(d2)
    else:
        delta = N_d1 - 1.0
        theta = decay + r * K * disc_r * _N(-d2)
        rho   = -K * T * disc_r * _N(-d2)

    return {"delta": delta, "gamma": gamma, "vega": vega, "theta": theta, "rho": rho}


def implied_vol(market: MarketInput, target_price: float, *,
                tol: float = 1e-8, maxiter: int = 100, bracket=(1e-6, 5.0)) -> float:
    """Brent root find on sigma; ``market.volatility`` is ignored."""
    from scipy.optimize import brentq

    S, K, T, r = market.spot, market.strike, market.time_to_maturity, market.rate
    if not target_price > 0:
        raise InvalidInput(f"target_price must be positive, got {target_price}")

    def f(sig):
        return _premium(S, K, T, r, sig, market.is_call) - target_price

    a, b = bracket
    fa, fb = f(a), f(b)
    if fa * fb > 0:
        # widen bracket heuristically
        a, b = 1e-6, max(10.0, 2 * b)
        logger.debug("implied_vol: widening bracket to (%g, %g)", a, b)
        fa, fb = f(a), f(b)
        if fa * fb > 0:
            raise InvalidInput(
                f"target_price {target_price} is outside the attainable "
                f"range [{fa + target_price:.6g}, {fb + target_price:.6g}]"
            )
    return float(brentq(f, a, b, xtol=tol, maxiter=maxiter))


def price_analytic(market: MarketInput, *, convention: str = LEGACY,
                   market_premium: float | None = None) -> PricingResult:
    """Black-Scholes premium, Greeks, days-to-expiry and intrinsic value.

    Parameters
    ----------
    market : MarketInput
    convention : str
        ``"legacy"`` (default) or ``"textbook"`` Greeks, see :func:`greeks`.
    market_premium : float, optional
        Observed option price.  When given, ``implied_volatility`` is solved
        for it; otherwise the field simply echoes ``market.volatility``.

    Returns
    -------
    PricingResult
    """
    premium = price(market)
    g = greeks(market, convention)

    if market_premium is None:
        iv = market.volatility
    else:
        iv = implied_vol(market, market_premium)

    if market.kind == CALL:
        intrinsic = max(market.spot - market.strike, 0.0)
    else:
        intrinsic = max(market.strike - market.spot, 0.0)

    return PricingResult(
        premium=premium,
        days_to_expiry=days_to_expiry(market.time_to_maturity),
        delta=g["delta"],
        gamma=g["gamma"],
        theta=g["theta"],
        vega=g["vega"],
        rho=g["rho"],
        implied_volatility=iv,
        intrinsic_value=intrinsic,
    )
