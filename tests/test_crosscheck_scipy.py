"""Cross-check torchdens against SciPy for numerical accuracy.

The Unit Johnson SU law is the logistic image of ``scipy.stats.johnsonsu``
with ``a = mu``, ``b = sigma``; the Gaussian copula is the ratio of a
bivariate normal density to the product of its margins.
"""
import unittest
import numpy as np
import torch

try:
    from scipy import special, stats as sps
    HAS_SCIPY = True
except ImportError:
    HAS_SCIPY = False

import torchdens as td


PARAMS = [(0.0, 1.0), (0.3, 2.0), (-0.5, 1.5), (1.2, 0.7)]

RNG = np.random.default_rng(42)
X_NP = np.clip(RNG.uniform(size=500), 1e-4, 1.0 - 1e-4)
X_TH = torch.tensor(X_NP, dtype=torch.float64)


@unittest.skipUnless(HAS_SCIPY, "scipy not installed")
class TestUnitJohnsonAccuracy(unittest.TestCase):
    """Cross-check the Unit Johnson SU functions against scipy.stats.johnsonsu."""

    def test_log_density(self):
        y = special.logit(X_NP)
        for mu, sigma in PARAMS:
            with self.subTest(mu=mu, sigma=sigma):
                ref = sps.johnsonsu.logpdf(y, mu, sigma) - np.log(X_NP) - np.log1p(-X_NP)
                got = td.unit_johnson_log_density(X_TH, mu, sigma).numpy()
                np.testing.assert_allclose(got, ref, rtol=1e-9, atol=1e-9)
                self.assertAlmostEqual(float(td.unit_johnson_lpdf(X_TH, mu, sigma)), float(ref.sum()), places=6)

    def test_cdf_lcdf_lccdf(self):
        y = special.logit(X_NP)
        for mu, sigma in PARAMS:
            with self.subTest(mu=mu, sigma=sigma):
                np.testing.assert_allclose(td.unit_johnson_cdf(X_TH, mu, sigma).numpy(),
                                           sps.johnsonsu.cdf(y, mu, sigma), rtol=1e-9, atol=1e-12)
                np.testing.assert_allclose(td.unit_johnson_lcdf(X_TH, mu, sigma).numpy(),
                                           sps.johnsonsu.logcdf(y, mu, sigma), rtol=1e-6, atol=1e-8)
                np.testing.assert_allclose(td.unit_johnson_lccdf(X_TH, mu, sigma).numpy(),
                                           sps.johnsonsu.logsf(y, mu, sigma), rtol=1e-6, atol=1e-8)

    def test_quantile(self):
        p = np.linspace(0.02, 0.98, 49)
        for mu, sigma in PARAMS:
            with self.subTest(mu=mu, sigma=sigma):
                ref = special.expit(sps.johnsonsu.ppf(p, mu, sigma))
                got = td.unit_johnson_quantile(torch.tensor(p, dtype=torch.float64), mu, sigma).numpy()
                np.testing.assert_allclose(got, ref, rtol=1e-8, atol=1e-12)

    def test_rng_kstest(self):
        for mu, sigma in PARAMS:
            with self.subTest(mu=mu, sigma=sigma):
                g = torch.Generator().manual_seed(2024)
                y = td.unit_johnson_rng(mu, sigma, size=4000, generator=g, dtype=torch.float64).numpy()
                res = sps.kstest(special.logit(y), sps.johnsonsu(mu, sigma).cdf)
                self.assertGreater(res.pvalue, 1e-3)


@unittest.skipUnless(HAS_SCIPY, "scipy not installed")
class TestNormalCopulaAccuracy(unittest.TestCase):
    """Cross-check normal_copula against scipy.stats.multivariate_normal."""

    def test_log_density(self):
        z = RNG.standard_normal(size=(300, 2))
        for rho in (-0.8, -0.2, 0.45, 0.9):
            with self.subTest(rho=rho):
                mvn = sps.multivariate_normal(mean=[0.0, 0.0], cov=[[1.0, rho], [rho, 1.0]])
                ref = mvn.logpdf(z) - sps.norm.logpdf(z[:, 0]) - sps.norm.logpdf(z[:, 1])
                u = torch.tensor(z[:, 0], dtype=torch.float64)
                v = torch.tensor(z[:, 1], dtype=torch.float64)
                np.testing.assert_allclose(td.normal_copula(u, v, rho).numpy(), ref, rtol=1e-9, atol=1e-10)
                self.assertAlmostEqual(float(td.normal_copula_vector(u, v, rho)), float(ref.sum()), places=6)


if __name__ == "__main__":
    unittest.main()
