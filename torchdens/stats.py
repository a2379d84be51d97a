"""Statistical helper functions — standard normal CDF/quantile, logit, etc."""

from __future__ import annotations

import math
import torch


_LOG_SQRT_2PI = 0.5 * math.log(2.0 * math.pi)


def _as_tensor(x, *, device=None, dtype=None):
    if torch.is_tensor(x):
        t = x
        if device is not None:
            t = t.to(device=device)
        if dtype is not None:
            t = t.to(dtype=dtype)
        return t
    return torch.as_tensor(x, device=device, dtype=dtype)


def _as_float_tensor(x, *, device=None, dtype=None) -> torch.Tensor:
    # Python scalars and integer tensors become floating tensors of the default dtype.
    t = _as_tensor(x, device=device, dtype=dtype)
    if not t.is_floating_point():
        t = t.to(dtype=torch.get_default_dtype())
    return t


def _as_float_tensors(*xs):
    """Convert ``xs`` to floating tensors on a common device and dtype.

    The dtype is the promotion of the floating tensors among ``xs``; Python
    scalars, sequences and integer tensors do not take part. Without any
    floating tensor the default dtype is used. The device is that of the
    first tensor argument.
    """
    tensors = [x for x in xs if torch.is_tensor(x)]
    device = tensors[0].device if tensors else None
    dtype = None
    for t in tensors:
        if t.is_floating_point():
            dtype = t.dtype if dtype is None else torch.promote_types(dtype, t.dtype)
    if dtype is None:
        dtype = torch.get_default_dtype()
    return tuple(_as_tensor(x, device=device, dtype=dtype) for x in xs)


def _as_param(x) -> torch.Tensor:
    # Model parameters default to float64 unless passed as floating tensors.
    if torch.is_tensor(x):
        return x if x.is_floating_point() else x.to(dtype=torch.float64)
    return torch.as_tensor(x, dtype=torch.float64)


def log_dnorm(x: torch.Tensor) -> torch.Tensor:
    """Standard normal log-density."""
    x = _as_tensor(x)
    return -0.5 * x * x - _LOG_SQRT_2PI


def pnorm(x: torch.Tensor) -> torch.Tensor:
    x = _as_tensor(x)
    return torch.special.ndtr(x)


def log_pnorm(x: torch.Tensor) -> torch.Tensor:
    """log Phi(x), accurate far into the lower tail."""
    x = _as_tensor(x)
    return torch.special.log_ndtr(x)


def log_pnorm_upper(x: torch.Tensor) -> torch.Tensor:
    """log(1 - Phi(x)) without cancellation in the upper tail."""
    x = _as_tensor(x)
    return torch.special.log_ndtr(-x)


def qnorm(u: torch.Tensor) -> torch.Tensor:
    u = _as_tensor(u)
    # torch.special.ndtri is the inverse of the standard normal CDF
    return torch.special.ndtri(u)


def log1m(x: torch.Tensor) -> torch.Tensor:
    x = _as_tensor(x)
    return torch.log1p(-x)


def logit(p: torch.Tensor) -> torch.Tensor:
    """log(p / (1 - p)) as log(p) - log1m(p)."""
    p = _as_tensor(p)
    return torch.log(p) - log1m(p)


def inv_logit(x: torch.Tensor) -> torch.Tensor:
    x = _as_tensor(x)
    return torch.sigmoid(x)
