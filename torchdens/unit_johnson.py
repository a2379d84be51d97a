"""Unit Johnson SU distribution — density, CDFs, quantile and sampling.

The distribution lives on (0, 1): if ``Y`` follows a standard Johnson SU law,
``Z = mu + sigma * asinh(Y) ~ N(0, 1)``, then ``X = inv_logit(Y)`` is Unit
Johnson SU distributed. The log-density therefore carries the Jacobian of the
logit map, ``-log(x) - log(1-x) - 0.5*log(1 + logit(x)^2)``.

All functions are unchecked: ``sigma <= 0`` or ``x`` outside [0, 1] produce
NaN/inf instead of raising.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import torch

from . import stats
from .families import Family, family_npars
from .simulate import simulate_uniform


def _prep(x, mu, sigma) -> tuple[torch.Tensor, torch.Tensor, torch.Tensor]:
    return stats._as_float_tensors(x, mu, sigma)


def _on_boundary(x: torch.Tensor) -> torch.Tensor:
    return (x == 0.0) | (x == 1.0)


def _johnson_z(x: torch.Tensor, mu: torch.Tensor, sigma: torch.Tensor) -> torch.Tensor:
    # Standard normal score of x.
    return mu + sigma * torch.asinh(stats.logit(x))


def _log_kernel(x: torch.Tensor, mu: torch.Tensor, sigma: torch.Tensor) -> torch.Tensor:
    # Log-density without the log(sigma) term; -inf on the closed boundary {0, 1}.
    lx = torch.log(x)
    l1mx = stats.log1m(x)
    lg = lx - l1mx
    jac = lx + l1mx + 0.5 * torch.log1p(lg * lg)
    out = stats.log_dnorm(mu + sigma * torch.asinh(lg)) - jac
    return torch.where(_on_boundary(x), torch.full_like(out, -math.inf), out)


def unit_johnson_log_density(x, mu, sigma) -> torch.Tensor:
    """Pointwise log-density (broadcasts over ``x``, ``mu`` and ``sigma``)."""
    x, mu, sigma = _prep(x, mu, sigma)
    return torch.log(sigma) + _log_kernel(x, mu, sigma)


def unit_johnson_pdf(x, mu, sigma) -> torch.Tensor:
    return torch.exp(unit_johnson_log_density(x, mu, sigma))


def unit_johnson_lpdf(x, mu, sigma) -> torch.Tensor:
    """Joint log-density of the observations ``x`` (summed over all elements).

    ``log(sigma)`` enters once per observation and is added as
    ``N * log(sigma)`` outside of the sum. The result is 0-dim also for
    non-scalar ``mu``/``sigma``. Returns ``-inf`` as soon as one
    observation is exactly 0 or 1.
    """
    x, mu, sigma = _prep(x, mu, sigma)
    kernel = _log_kernel(x.reshape(-1), mu, sigma)
    # each sigma element is repeated kernel.numel() // sigma.numel() times by broadcasting
    n = kernel.numel() // max(sigma.numel(), 1)
    return n * torch.log(sigma).sum() + kernel.sum()


def unit_johnson_cdf(x, mu, sigma) -> torch.Tensor:
    x, mu, sigma = _prep(x, mu, sigma)
    return stats.pnorm(_johnson_z(x, mu, sigma))


def unit_johnson_lcdf(x, mu, sigma) -> torch.Tensor:
    x, mu, sigma = _prep(x, mu, sigma)
    return stats.log_pnorm(_johnson_z(x, mu, sigma))


def unit_johnson_lccdf(x, mu, sigma) -> torch.Tensor:
    x, mu, sigma = _prep(x, mu, sigma)
    return stats.log_pnorm_upper(_johnson_z(x, mu, sigma))


def unit_johnson_quantile(p, mu, sigma) -> torch.Tensor:
    """Inverse CDF: ``inv_logit(sinh((qnorm(p) - mu) / sigma))``."""
    p, mu, sigma = _prep(p, mu, sigma)
    return stats.inv_logit(torch.sinh((stats.qnorm(p) - mu) / sigma))


def unit_johnson_rng(
    mu,
    sigma,
    *,
    size: int | tuple[int, ...] = (),
    generator: torch.Generator | None = None,
    dtype: torch.dtype | None = None,
    device=None,
) -> torch.Tensor:
    """Draw Unit Johnson SU variates by inverting the CDF.

    Uniforms are drawn from ``generator`` (torch's default generator when
    ``None``). Extreme uniforms may saturate the result to exactly 0 or 1.
    """
    mu, sigma = stats._as_float_tensors(mu, sigma)
    mu = stats._as_tensor(mu, device=device, dtype=dtype)
    sigma = stats._as_tensor(sigma, device=device, dtype=dtype)
    if isinstance(size, int):
        size = (size,)
    shape = torch.broadcast_shapes(tuple(size), mu.shape, sigma.shape)
    u = torch.rand(shape, generator=generator, device=mu.device, dtype=mu.dtype)
    return unit_johnson_quantile(u, mu, sigma)


@dataclass
class UnitJohnsonSU:
    mu: float | torch.Tensor = 0.0
    sigma: float | torch.Tensor = 1.0
    validate_args: bool = True

    def __post_init__(self):
        self.mu = stats._as_param(self.mu)
        self.sigma = stats._as_tensor(stats._as_param(self.sigma), device=self.mu.device, dtype=self.mu.dtype)
        if self.validate_args:
            if not bool(torch.isfinite(self.mu).all()):
                raise ValueError("mu must be finite")
            if not bool((self.sigma > 0).all()) or not bool(torch.isfinite(self.sigma).all()):
                raise ValueError("sigma must be finite and > 0")

    def to(self, *args, **kwargs) -> "UnitJohnsonSU":
        """Move parameters to device/dtype (in-place)."""
        self.mu = self.mu.to(*args, **kwargs)
        self.sigma = self.sigma.to(*args, **kwargs)
        return self

    @property
    def family(self) -> Family:
        return Family.unit_johnson

    @property
    def npars(self) -> float:
        return float(family_npars(self.family))

    def log_density(self, x: torch.Tensor) -> torch.Tensor:
        return unit_johnson_log_density(x, self.mu, self.sigma)

    def pdf(self, x: torch.Tensor) -> torch.Tensor:
        return unit_johnson_pdf(x, self.mu, self.sigma)

    def lpdf(self, x: torch.Tensor) -> torch.Tensor:
        return unit_johnson_lpdf(x, self.mu, self.sigma)

    def cdf(self, x: torch.Tensor) -> torch.Tensor:
        return unit_johnson_cdf(x, self.mu, self.sigma)

    def lcdf(self, x: torch.Tensor) -> torch.Tensor:
        return unit_johnson_lcdf(x, self.mu, self.sigma)

    def lccdf(self, x: torch.Tensor) -> torch.Tensor:
        return unit_johnson_lccdf(x, self.mu, self.sigma)

    def quantile(self, p: torch.Tensor) -> torch.Tensor:
        p = stats._as_float_tensor(p, device=self.mu.device)
        return unit_johnson_quantile(p, self.mu, self.sigma)

    def median(self) -> float:
        return float(self.quantile(torch.tensor(0.5, dtype=self.mu.dtype)).item())

    def simulate(
        self,
        n: int,
        *,
        seeds: list[int] | tuple[int, ...] = (),
        qrng: bool = False,
        generator: torch.Generator | None = None,
    ) -> torch.Tensor:
        if n <= 0:
            raise ValueError("n must be positive")
        if generator is not None:
            return unit_johnson_rng(self.mu, self.sigma, size=int(n), generator=generator)
        u = simulate_uniform(n, 1, qrng=qrng, seeds=seeds, dtype=self.mu.dtype, device=self.mu.device)
        return self.quantile(u.reshape(-1))

    def loglik(self, x: torch.Tensor) -> float:
        return float(self.lpdf(x).item())

    def aic(self, x: torch.Tensor) -> float:
        return -2.0 * self.loglik(x) + 2.0 * self.npars

    def bic(self, x: torch.Tensor) -> float:
        n = float(torch.as_tensor(x).numel())
        return -2.0 * self.loglik(x) + math.log(n) * self.npars

    def str(self) -> str:
        """Human-readable string representation."""
        parts = ["<torchdens.UnitJohnsonSU>"]
        parts.append(f"  mu: {float(self.mu):.4f}")
        parts.append(f"  sigma: {float(self.sigma):.4f}")
        return "\n".join(parts)

    def to_json(self) -> dict[str, Any]:
        return {
            "family": self.family.value,
            "mu": float(self.mu),
            "sigma": float(self.sigma),
        }

    @staticmethod
    def from_json(obj: dict[str, Any]) -> "UnitJohnsonSU":
        return UnitJohnsonSU(mu=float(obj.get("mu", 0.0)), sigma=float(obj.get("sigma", 1.0)))
