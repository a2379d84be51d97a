"""torchdens — Pure-PyTorch distribution and copula densities.

Closed-form Unit Johnson SU and Gaussian copula log-densities for use as
log-probability terms inside an external sampler. GPU-ready and differentiable.
"""

from __future__ import annotations

__version__ = "0.1.0"

from typing import Any

from .families import Family, normalize_family
from .unit_johnson import (
    UnitJohnsonSU,
    unit_johnson_lpdf,
    unit_johnson_cdf,
    unit_johnson_lcdf,
    unit_johnson_lccdf,
    unit_johnson_rng,
    unit_johnson_log_density,
    unit_johnson_pdf,
    unit_johnson_quantile,
)
from .normal_copula import NormalCopula, normal_copula, normal_copula_vector
from .simulate import simulate_uniform

import torch


def get_device(verbose: bool = False) -> torch.device:
    """Return the best available device (CUDA if available, else CPU).

    Parameters
    ----------
    verbose : bool, optional
        If ``True``, print which device was selected.

    Returns
    -------
    torch.device
    """
    if torch.cuda.is_available():
        dev = torch.device("cuda")
    else:
        dev = torch.device("cpu")
    if verbose:
        print(f"torchdens: using device '{dev}'")
    return dev


def from_json(obj: dict[str, Any]) -> UnitJohnsonSU | NormalCopula:
    """Rebuild a model object from the dict produced by its ``to_json()``."""
    fam = normalize_family(obj["family"])
    if fam == Family.unit_johnson:
        return UnitJohnsonSU.from_json(obj)
    return NormalCopula.from_json(obj)


__all__ = [
    "Family",
    "UnitJohnsonSU",
    "NormalCopula",
    "get_device",
    "simulate_uniform",
    "from_json",
    # Unit Johnson SU
    "unit_johnson_lpdf",
    "unit_johnson_cdf",
    "unit_johnson_lcdf",
    "unit_johnson_lccdf",
    "unit_johnson_rng",
    "unit_johnson_log_density",
    "unit_johnson_pdf",
    "unit_johnson_quantile",
    # Gaussian copula
    "normal_copula",
    "normal_copula_vector",
]
