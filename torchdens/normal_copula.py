"""Bivariate Gaussian (normal) copula log-density.

``u`` and ``v`` are the normal-score images the calling model passes in
(``normal_copula(Phi(x_std), Phi(y_std), rho)``); they are used as given.
The log-density is written out for the 2x2 exchangeable correlation matrix,
so no matrix inverse or determinant is formed:

    log c = 0.5*rho*(-2*u*v + rho*u^2 + rho*v^2) / (rho^2 - 1) - 0.5*log(1 - rho^2)

Nothing is validated: |rho| >= 1 gives NaN or +/-inf.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import torch

from . import stats
from .families import Family, family_npars


def normal_copula(u, v, rho) -> torch.Tensor:
    """Elementwise copula log-density (broadcasts over ``u``, ``v``, ``rho``)."""
    u, v, rho = stats._as_float_tensors(u, v, rho)
    rho2 = rho * rho
    return 0.5 * rho * (-2.0 * u * v + rho * (u * u + v * v)) / (rho2 - 1.0) - 0.5 * torch.log1p(-rho2)


def normal_copula_vector(u, v, rho) -> torch.Tensor:
    """Sum of ``normal_copula(u_i, v_i, rho)`` over all N pairs.

    Evaluated with three dot products and the rho-dependent constants computed
    once, instead of N scalar evaluations.
    """
    u, v, rho = stats._as_float_tensors(u, v, rho)
    u = u.reshape(-1)
    v = v.reshape(-1)
    if u.numel() != v.numel():
        raise ValueError("u and v must have the same length")
    n = u.numel()
    a1 = 0.5 * rho
    a2 = rho * rho - 1.0
    a3 = 0.5 * torch.log1p(-rho * rho)
    x = -2.0 * torch.dot(u, v) + rho * (torch.dot(u, u) + torch.dot(v, v))
    return a1 * x / a2 - n * a3


@dataclass
class NormalCopula:
    rho: float | torch.Tensor = 0.0
    validate_args: bool = True

    def __post_init__(self):
        self.rho = stats._as_param(self.rho)
        if self.validate_args and not bool((self.rho.abs() < 1.0).all()):
            raise ValueError("rho must be in (-1, 1)")

    def to(self, *args, **kwargs) -> "NormalCopula":
        """Move the parameter to device/dtype (in-place)."""
        self.rho = self.rho.to(*args, **kwargs)
        return self

    @property
    def family(self) -> Family:
        return Family.normal_copula

    @property
    def npars(self) -> float:
        return float(family_npars(self.family))

    @property
    def tau(self) -> float:
        return self.parameters_to_tau()

    def log_density(self, u: torch.Tensor, v: torch.Tensor) -> torch.Tensor:
        return normal_copula(u, v, self.rho)

    def loglik(self, u: torch.Tensor, v: torch.Tensor) -> float:
        return float(normal_copula_vector(u, v, self.rho).item())

    def aic(self, u: torch.Tensor, v: torch.Tensor) -> float:
        return -2.0 * self.loglik(u, v) + 2.0 * self.npars

    def bic(self, u: torch.Tensor, v: torch.Tensor) -> float:
        n = float(torch.as_tensor(u).numel())
        return -2.0 * self.loglik(u, v) + math.log(n) * self.npars

    def parameters_to_tau(self) -> float:
        # Kendall's tau of the Gaussian copula.
        rho = float(self.rho)
        tau = (2.0 / math.pi) * math.asin(max(-1.0, min(1.0, rho)))
        return float(max(-1.0, min(1.0, tau)))

    def tau_to_parameters(self, tau: float) -> torch.Tensor:
        t = float(tau)
        return torch.tensor([math.sin(t * math.pi / 2.0)], device=self.rho.device, dtype=self.rho.dtype)

    def str(self) -> str:
        """Human-readable string representation."""
        parts = ["<torchdens.NormalCopula>"]
        parts.append(f"  rho: {float(self.rho):.4f}")
        return "\n".join(parts)

    def to_json(self) -> dict[str, Any]:
        return {
            "family": self.family.value,
            "rho": float(self.rho),
        }

    @staticmethod
    def from_json(obj: dict[str, Any]) -> "NormalCopula":
        return NormalCopula(rho=float(obj.get("rho", 0.0)))
