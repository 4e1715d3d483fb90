# detsched/kernels/pair_kernel.py

"""L-ensemble kernel for transmitter/receiver pairs.

Pipeline (pure, stateless):
    validate -> theta . feature -> quality q -> L = diag(q) S diag(q)

L parameterises a DPP over the pairs: P(Y) is proportional to det(L_Y), so
the similarity S supplies repulsion between interfering links while q biases
the size and makeup of the scheduled set. Building S and sampling from the DPP
happen elsewhere.
"""

from __future__ import annotations

import logging
from typing import Any, NamedTuple, Optional

import torch

from detsched.kernels.config import PairKernelConfig
from detsched.kernels.features import resolve_feature_mode, theta_feature
from detsched.kernels.quality import QualityFn, abs_power_quality, apply_quality
from detsched.physics.geometry import PointSet
from detsched.utils.tensor_utils import as_float_tensor, as_vector

logger = logging.getLogger(__name__)


class PairKernel(NamedTuple):
    kernel: torch.Tensor   # L, [N, N]
    quality: torch.Tensor  # q, [N]


def assemble_kernel(q: torch.Tensor, similarity: torch.Tensor) -> torch.Tensor:
    """L[i, j] = q[i] * S[i, j] * q[j]; symmetric whenever S is."""
    return q.unsqueeze(-1) * similarity * q.unsqueeze(0)  # outer(q, q) (Hadamard) S


def build_point_kernel(points: PointSet,
                       similarity: Any,
                       theta: Any,
                       feature_count: int = 0,
                       quality_fn: Optional[QualityFn] = None) -> PairKernel:
    """Build L and q for an already constructed PointSet.

    Runs in the dtype/device of `points`. See `build_pair_kernel` for the
    meaning of the remaining arguments.
    """
    theta_v = as_vector(theta, dtype=points.tx.dtype, device=points.tx.device)  # column-vector theta
    spec = resolve_feature_mode(theta_v.numel(), feature_count, points.size)  # fails before any maths

    tf = theta_feature(points, theta_v, spec)  # theta . f_i per pair
    q = apply_quality(tf, quality_fn)          # [N], one quality per pair

    S = as_float_tensor(similarity, dtype=q.dtype, device=q.device)
    L = assemble_kernel(q, S)
    logger.debug("built L-ensemble kernel %s (mode=%s)", tuple(L.shape), spec.mode.value)
    return PairKernel(kernel=L, quality=q)


def build_pair_kernel(tx: Any,
                      rx: Any,
                      similarity: Any,
                      theta: Any,
                      feature_count: int = 0,
                      quality_fn: Optional[QualityFn] = None,
                      *,
                      dtype: torch.dtype = torch.float64,
                      device: Optional[torch.device] = None) -> PairKernel:
    """Build the L-ensemble kernel and quality vector for N TX/RX pairs.

    Args:
        tx, rx: (N, 2) coordinates of transmitters / their paired receivers.
        similarity: (N, N) similarity matrix S (trusted, not checked).
        theta: fitting parameters, length M >= 1 (flattened).
        feature_count: 0 (use all of theta) up to M.
        quality_fn: scalar map real -> real applied to each theta . feature
            value (or a `vectorized` tensor function); defaults to |v|^2.
            Must be convex for the L-ensemble guarantees to hold.

    Raises:
        InvalidParameterError: empty theta, feature_count > M, or more than one
            feature requested with fewer pairs than features.
    """
    points = PointSet.from_coords(tx, rx, dtype=dtype, device=device)
    return build_point_kernel(points, similarity, theta, feature_count, quality_fn)


def build_pair_kernel_from_config(points: PointSet,
                                  similarity: Any,
                                  theta: Any,
                                  cfg: PairKernelConfig,
                                  quality_fn: Optional[QualityFn] = None) -> PairKernel:
    """Same as `build_point_kernel`, with settings read from a PairKernelConfig.

    An explicit `quality_fn` takes precedence over the configured power.
    """
    fn = quality_fn if quality_fn is not None else abs_power_quality(cfg.quality_power)
    device = cfg.device()
    # move the layout onto the configured device/dtype before any maths
    points = PointSet(tx=points.tx.to(device=device, dtype=cfg.torch_dtype),
                      rx=points.rx.to(device=device, dtype=cfg.torch_dtype))
    return build_point_kernel(points, similarity, theta,
                              feature_count=cfg.feature_count,
                              quality_fn=fn)
