# europricer — European option pricing: Black-Scholes and Monte Carlo
# Public API

from .core import (
    MarketInput, PricingResult, MCResult, InvalidInput,
    CALL, PUT, LEGACY, TEXTBOOK, DAYS_PER_YEAR,
)
from .normal import erf_approx, standard_normal_cdf, standard_normal_pdf
from .black_scholes import price_analytic, price as bs_price, greeks as bs_greeks, implied_vol
from .processes import GaussianSampler, default_sampler, draw_gaussian, terminal_price
from .monte_carlo import price_monte_carlo, euro_price_mc
from .validation import cross_validate, convergence_analysis

__all__ = [
    # Data model
    "MarketInput", "PricingResult", "MCResult", "InvalidInput",
    "CALL", "PUT", "LEGACY", "TEXTBOOK", "DAYS_PER_YEAR",
    # Normal distribution
    "erf_approx", "standard_normal_cdf", "standard_normal_pdf",
    # Analytic
    "price_analytic", "bs_price", "bs_greeks", "implied_vol",
    # Sampling
    "GaussianSampler", "default_sampler", "draw_gaussian", "terminal_price",
    # Monte Carlo
    "price_monte_carlo", "euro_price_mc",
    # Validation
    "cross_validate", "convergence_analysis",
]

__version__ = "0.1.0"
