# detsched/kernels/quality.py

"""Quality models q = f(theta . feature).

The L-ensemble stays well behaved (and theta stays fittable) only when f is
convex. The built-in family is |v|^p with p >= 2. Exponential quality, q =
exp(theta . f), is deliberately not offered: it blows up numerically under
gradient-based fitting.

A user-supplied f is a plain scalar function real -> real, applied to each
pair's theta . feature value in turn; convexity is then the caller's
responsibility. Functions marked with `vectorized` receive the whole [N]
tensor in one call instead.
"""

from __future__ import annotations

from typing import Callable

import torch

from detsched.errors import InvalidParameterError

QualityFn = Callable[[torch.Tensor], torch.Tensor]

DEFAULT_POWER = 2.0


def vectorized(fn: QualityFn) -> QualityFn:
    """Mark a quality function as tensor-aware (called once on the [N] tensor)."""
    fn.vectorized = True
    return fn


def abs_power_quality(p: float = DEFAULT_POWER) -> QualityFn:
    """Return v -> |v|^p; p < 2 would break convexity and is rejected."""
    p = float(p)
    if not p >= 2.0:  # also catches nan
        raise InvalidParameterError(f"quality power must be >= 2 for a convex model, got {p}")

    @vectorized
    def quality(theta_feature: torch.Tensor) -> torch.Tensor:
        return torch.abs(theta_feature) ** p

    return quality


default_quality: QualityFn = abs_power_quality(DEFAULT_POWER)


def apply_quality(theta_feature: torch.Tensor, quality_fn: QualityFn | None = None) -> torch.Tensor:
    """Map theta . feature values to the quality vector, always shaped like the input."""
    fn = default_quality if quality_fn is None else quality_fn
    if getattr(fn, "vectorized", False):
        q = torch.as_tensor(fn(theta_feature), dtype=theta_feature.dtype, device=theta_feature.device)
        return q.expand_as(theta_feature).clone()  # scalar results still give one value per pair

    # scalar contract: one call per pair, each value handed over as a python float
    values = [float(fn(v)) for v in theta_feature.tolist()]
    return torch.tensor(values, dtype=theta_feature.dtype, device=theta_feature.device)
