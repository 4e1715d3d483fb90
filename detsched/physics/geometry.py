# detsched/physics/geometry.py

"""Transmitter/receiver pair geometry.

Each scheduling candidate is a link: transmitter i talks to receiver i.
Features of the quality model are built from TX -> RX distances, normalised by
the link's own length, so that a link whose nearest foreign receiver is "close
relative to its own receiver" scores differently from an isolated one.

Pure torch ops; works on CPU or GPU.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import torch

from detsched.errors import InvalidParameterError
from detsched.utils.tensor_utils import as_float_tensor, as_vector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PointSet:
    """N transmitter/receiver pairs; `tx[i]` is paired with `rx[i]`."""
    tx: torch.Tensor  # [N, 2]
    rx: torch.Tensor  # [N, 2]

    def __post_init__(self):
        if self.tx.ndim != 2 or self.tx.shape[-1] != 2:
            raise InvalidParameterError(f"tx must have shape (N, 2), got {tuple(self.tx.shape)}")
        if self.rx.shape != self.tx.shape:
            raise InvalidParameterError(
                f"rx shape {tuple(self.rx.shape)} does not match tx shape {tuple(self.tx.shape)}")

    @staticmethod
    def from_coords(tx: Any,
                    rx: Any,
                    dtype: torch.dtype = torch.float64,
                    device: Optional[torch.device] = None) -> "PointSet":
        """Build from two (N, 2) array-likes of (x, y) coordinates."""
        t = as_float_tensor(tx, dtype=dtype, device=device).reshape(-1, 2)
        r = as_float_tensor(rx, dtype=dtype, device=device).reshape(-1, 2)
        return PointSet(tx=t, rx=r)

    @staticmethod
    def from_xy(xx_tx: Any, yy_tx: Any, xx_rx: Any, yy_rx: Any,
                dtype: torch.dtype = torch.float64,
                device: Optional[torch.device] = None) -> "PointSet":
        """Build from four coordinate vectors (any shape; flattened)."""
        cols = [as_vector(v, dtype=dtype, device=device) for v in (xx_tx, yy_tx, xx_rx, yy_rx)]
        if len({c.numel() for c in cols}) != 1:
            raise InvalidParameterError("coordinate vectors must all have the same length")
        return PointSet(tx=torch.stack(cols[:2], dim=-1), rx=torch.stack(cols[2:], dim=-1))

    @property
    def size(self) -> int:
        """Number of pairs N (the side of the kernel matrix)."""
        return int(self.tx.shape[0])


def cross_distances(points: PointSet) -> torch.Tensor:
    """Euclidean distances dist[i, j] = |tx_i - rx_j|, shape [N, N]."""
    diff = points.tx.unsqueeze(1) - points.rx.unsqueeze(0)  # [N, N, 2] via broadcasting
    return torch.hypot(diff[..., 0], diff[..., 1])


def own_pair_distances(dist: torch.Tensor) -> torch.Tensor:
    """Length of each link, d_i = dist[i, i]."""
    return torch.diagonal(dist)


def rescaled_neighbour_distances(points: PointSet) -> torch.Tensor:
    """Cross distances divided by the row's own link length, diagonal set to +inf.

    D[i, j] = |tx_i - rx_j| / |tx_i - rx_i| for j != i, D[i, i] = inf, so a
    pair's own receiver can never be picked as its nearest neighbour.

    A zero-length link (tx_i == rx_i) is not guarded: its row becomes inf/nan
    and propagates into the quality vector.
    """
    dist = cross_distances(points)
    d_own = own_pair_distances(dist)  # link lengths |tx_i - rx_i|

    degenerate = d_own == 0
    if torch.any(degenerate):
        idx = torch.nonzero(degenerate).flatten().tolist()
        logger.warning("zero transmitter-receiver distance for pairs %s; features will be non-finite", idx)

    scaled = dist / d_own.unsqueeze(-1)  # row i divided by d_i
    eye = torch.eye(points.size, dtype=torch.bool, device=scaled.device)
    return scaled.masked_fill(eye, float("inf"))  # own receiver is never a neighbour
