"""Monte Carlo pricer against the analytic benchmark."""

import numpy as np
import pytest

from europricer.core import MarketInput, MCResult, InvalidInput
from europricer.black_scholes import price_analytic
from europricer.monte_carlo import price_monte_carlo, euro_price_mc
from europricer.processes import GaussianSampler

CALL_MKT = MarketInput(spot=100, strike=100, rate=0.05, volatility=0.2,
                       time_to_maturity=1.0, is_call=True)
PUT_MKT = CALL_MKT.replace(is_call=False)


@pytest.mark.parametrize("mkt", [CALL_MKT, PUT_MKT])
def test_mc_matches_bs_within_tol(mkt):
    ref = price_analytic(mkt).premium
    mc = price_monte_carlo(mkt, 500_000, seed=1)
    assert abs(mc - ref) / ref < 0.02


def test_mc_within_few_stderrs():
    ref = price_analytic(CALL_MKT).premium
    for seed in (11, 12, 13):
        res = euro_price_mc(CALL_MKT, 200_000, seed=seed)
        assert abs(res.price - ref) < 4.0 * res.stderr


def test_stderr_shrinks_with_paths():
    ses = [euro_price_mc(CALL_MKT, n, seed=5).stderr for n in (1_000, 100_000, 1_000_000)]
    assert ses[0] > ses[1] > ses[2]


def test_average_error_shrinks_with_paths():
    ref = price_analytic(CALL_MKT).premium

    def mean_err(n):
        return np.mean([abs(price_monte_carlo(CALL_MKT, n, seed=s) - ref) for s in range(10)])

    assert mean_err(1_000) > mean_err(100_000)


def test_returns_float():
    assert isinstance(price_monte_carlo(CALL_MKT, 1000, seed=0), float)


def test_result_fields():
    res = euro_price_mc(CALL_MKT, 10_000, seed=0)
    assert isinstance(res, MCResult)
    assert res.n_paths == 10_000
    lo, hi = res.confidence_interval(0.95)
    assert lo < res.price < hi


def test_fixed_seed_reproducible():
    assert price_monte_carlo(CALL_MKT, 5000, seed=3) == price_monte_carlo(CALL_MKT, 5000, seed=3)


def test_injected_sampler_matches_seed():
    a = price_monte_carlo(CALL_MKT, 5000, sampler=GaussianSampler(8))
    b = price_monte_carlo(CALL_MKT, 5000, seed=8)
    assert a == b


def test_chunking_does_not_change_estimate():
    a = price_monte_carlo(CALL_MKT, 10_000, seed=4, chunk_size=10_000)
    b = price_monte_carlo(CALL_MKT, 10_000, seed=4, chunk_size=2_500)
    # chunks consume the same generator stream in order
    assert a == pytest.approx(b, rel=1e-12)


def test_payoffs_never_negative():
    deep_otm = CALL_MKT.replace(strike=1000.0)
    assert price_monte_carlo(deep_otm, 10_000, seed=0) >= 0.0


def test_parallel_workers():
    ref = price_analytic(PUT_MKT).premium
    res = euro_price_mc(PUT_MKT, 200_000, seed=2, chunk_size=50_000, n_workers=2)
    assert res.n_paths == 200_000
    assert abs(res.price - ref) / ref < 0.02


class TestInvalidInput:
    @pytest.mark.parametrize("n", [0, -10])
    def test_num_paths(self, n):
        with pytest.raises(InvalidInput):
            price_monte_carlo(CALL_MKT, n)

    def test_non_integer_paths(self):
        with pytest.raises(InvalidInput):
            price_monte_carlo(CALL_MKT, 10.5)

    @pytest.mark.parametrize("changes", [
        {"spot": 0}, {"strike": -5}, {"volatility": 0}, {"time_to_maturity": 0},
    ])
    def test_market(self, changes):
        with pytest.raises(InvalidInput):
            price_monte_carlo(CALL_MKT.replace(**changes), 1000)

    @pytest.mark.parametrize("changes", [
        {"rate": float("nan")}, {"spot": float("inf")}, {"volatility": float("inf")},
        {"time_to_maturity": float("inf")},
    ])
    def test_non_finite_market(self, changes):
        with pytest.raises(InvalidInput):
            price_monte_carlo(CALL_MKT.replace(**changes), 1000)

    @pytest.mark.parametrize("kwargs", [
        {"chunk_size": 250.0}, {"chunk_size": 0}, {"n_workers": 0},
        {"n_workers": 1.5}, {"n_workers": True},
    ])
    def test_bad_execution_settings(self, kwargs):
        with pytest.raises(InvalidInput):
            price_monte_carlo(CALL_MKT, 1000, seed=0, **kwargs)


def test_single_path_has_no_confidence_interval():
    res = euro_price_mc(CALL_MKT, 1, seed=0)
    assert res.n_paths == 1
    assert np.isnan(res.stderr)
    with pytest.raises(InvalidInput):
        res.confidence_interval()


def test_parallel_seeded_runs_identical():
    kw = dict(seed=21, chunk_size=10_000, n_workers=3)
    a = euro_price_mc(CALL_MKT, 60_000, **kw)
    b = euro_price_mc(CALL_MKT, 60_000, **kw)
    assert a.price == b.price
    assert a.stderr == b.stderr
