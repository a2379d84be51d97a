"""Uniform (pseudo- and quasi-random) draws used by the samplers."""

from __future__ import annotations

import torch


def simulate_uniform(
    n: int,
    d: int = 1,
    *,
    qrng: bool = False,
    seeds: list[int] | tuple[int, ...] = (),
    dtype: torch.dtype | None = None,
    device=None,
) -> torch.Tensor:
    """Simulate from the multivariate uniform distribution.

    If ``qrng=True``, uses scrambled Sobol sequences for quasi-random numbers.
    Returns a tensor of shape ``(n, d)``.
    """
    n = int(n)
    d = int(d)
    if n <= 0:
        raise ValueError("n must be positive")
    if d <= 0:
        raise ValueError("d must be positive")
    dtype = dtype if dtype is not None else torch.get_default_dtype()
    if qrng:
        eng = torch.quasirandom.SobolEngine(dimension=d, scramble=True, seed=int(seeds[0]) if seeds else 0)
        return eng.draw(n, dtype=dtype).to(device=device)
    g = None
    if seeds:
        g = torch.Generator(device=device if device is not None else "cpu")
        g.manual_seed(int(seeds[0]))
    return torch.rand((n, d), generator=g, device=device, dtype=dtype)
