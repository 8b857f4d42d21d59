"""Tests for Gaussian sampling and GBM terminal prices."""

import math
import numpy as np
import pytest

from europricer.core import InvalidInput
from europricer import processes
from europricer.processes import (
    GaussianSampler, default_sampler, draw_gaussian, terminal_price,
)


class TestGaussianSampler:
    def test_fixed_seed_reproducible(self):
        a = GaussianSampler(7).draw(0.0, 1.0, size=5)
        b = GaussianSampler(7).draw(0.0, 1.0, size=5)
        np.testing.assert_array_equal(a, b)

    def test_scalar_draw_is_float(self):
        assert isinstance(GaussianSampler(1).draw(), float)

    def test_moments(self):
        z = GaussianSampler(42).draw(3.0, 2.0, size=200_000)
        assert abs(z.mean() - 3.0) < 0.02
        assert abs(z.std() - 2.0) < 0.02

    def test_negative_stddev(self):
        with pytest.raises(InvalidInput):
            GaussianSampler(1).draw(0.0, -1.0)

    def test_spawn_independent(self):
        kids = GaussianSampler(123).spawn(2)
        a = kids[0].standard_normal(1000)
        b = kids[1].standard_normal(1000)
        assert not np.allclose(a, b)
        assert abs(np.corrcoef(a, b)[0, 1]) < 0.15


class TestDefaultSampler:
    def test_created_once(self, monkeypatch):
        monkeypatch.setattr(processes, "_default", None)
        s1 = default_sampler()
        s2 = default_sampler()
        assert s1 is s2

    def test_draw_gaussian_uses_default(self, monkeypatch):
        monkeypatch.setattr(processes, "_default", GaussianSampler(5))
        got = draw_gaussian(0.0, 1.0)
        assert got == GaussianSampler(5).draw(0.0, 1.0)

    def test_consecutive_draws_differ(self):
        assert draw_gaussian() != draw_gaussian()

    def test_explicit_sampler(self):
        assert draw_gaussian(sampler=GaussianSampler(9)) == GaussianSampler(9).draw()


class TestTerminalPrice:
    def test_zero_shock(self):
        S_T = terminal_price(100.0, 0.05, 0.2, 1.0, 0.0)
        assert S_T == pytest.approx(100.0 * math.exp(0.05 - 0.02))

    def test_vectorised(self):
        z = np.array([-1.0, 0.0, 1.0])
        S_T = terminal_price(100.0, 0.05, 0.2, 1.0, z)
        assert S_T.shape == (3,)
        assert np.all(np.diff(S_T) > 0)

    def test_martingale(self):
        z = GaussianSampler(3).standard_normal(400_000)
        S_T = terminal_price(100.0, 0.05, 0.2, 1.0, z)
        assert abs(math.exp(-0.05) * S_T.mean() - 100.0) < 0.2
