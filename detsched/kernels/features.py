# detsched/kernels/features.py

"""Feature-count dispatch for the quality model.

The quality model is q = f(theta . feature). How many geometric features enter
the dot product is decided once, by `resolve_feature_mode`, and `theta_feature`
switches on the resulting mode:

- NO_FEATURES        feature_count == 0 with scalar theta: theta broadcast over the pairs
- CONSTANT           one feature: the constant 1 (theta[0] for every pair)
- NEAREST_NEIGHBOUR  two features: 1 and the nearest rescaled neighbour distance
- TOP_K_NEIGHBOURS   k+1 features: 1 and the k nearest rescaled neighbour distances
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import torch

from detsched.errors import InvalidParameterError
from detsched.physics.geometry import PointSet, rescaled_neighbour_distances

logger = logging.getLogger(__name__)


class FeatureMode(enum.Enum):
    NO_FEATURES = "no_features"
    CONSTANT = "constant"
    NEAREST_NEIGHBOUR = "nearest_neighbour"
    TOP_K_NEIGHBOURS = "top_k_neighbours"


@dataclass(frozen=True)
class FeatureSpec:
    mode: FeatureMode
    count: int  # effective number of theta entries used


def resolve_feature_mode(num_theta: int, feature_count: int, num_points: int) -> FeatureSpec:
    """Validate theta length / feature count / number of pairs and pick the mode.

    feature_count == 0 means "use all of theta"; it is normalised to len(theta)
    before the remaining checks and the normalised count picks the features.
    """
    if num_theta == 0:
        raise InvalidParameterError("theta needs at least one element")
    if feature_count < 0:
        raise InvalidParameterError(f"feature_count must be non-negative, got {feature_count}")

    requested = int(feature_count)
    count = num_theta if requested == 0 else requested

    if count > num_theta:
        raise InvalidParameterError("not enough elements in theta")
    if count > 1 and count > num_points:
        raise InvalidParameterError("need more points for theta vector of given length")

    if requested == 0 and count == 1:
        mode = FeatureMode.NO_FEATURES  # scalar theta, nothing to compute
    elif count == 1:
        mode = FeatureMode.CONSTANT
    elif count == 2:
        mode = FeatureMode.NEAREST_NEIGHBOUR
    else:
        mode = FeatureMode.TOP_K_NEIGHBOURS

    logger.debug("feature mode %s (count=%d, theta=%d, pairs=%d)", mode.value, count, num_theta, num_points)
    return FeatureSpec(mode=mode, count=count)


def nearest_neighbour_feature(scaled: torch.Tensor) -> torch.Tensor:
    """Smallest rescaled distance per row, [N]."""
    return scaled.min(dim=-1).values  # inf diagonal never wins


def top_k_neighbour_features(scaled: torch.Tensor, k: int) -> torch.Tensor:
    """The k smallest rescaled distances per row in ascending order, [N, k]."""
    return torch.sort(scaled, dim=-1).values[:, :k]


def theta_feature(points: PointSet, theta: torch.Tensor, spec: FeatureSpec) -> torch.Tensor:
    """Per-pair dot product theta . f_i, shape [N]."""
    n = points.size
    if spec.mode is FeatureMode.NO_FEATURES:
        return theta.expand(n).clone()  # scalar theta, same value for every pair

    # zeroth feature is the constant 1
    tf = theta[0] * torch.ones(n, dtype=theta.dtype, device=theta.device)
    if spec.mode is FeatureMode.CONSTANT:
        return tf

    scaled = rescaled_neighbour_distances(points).to(theta.dtype)  # [N, N], inf on the diagonal
    if spec.mode is FeatureMode.NEAREST_NEIGHBOUR:
        return tf + theta[1] * nearest_neighbour_feature(scaled)

    feats = top_k_neighbour_features(scaled, spec.count - 1)  # [N, count-1], k <= N-1 so all finite
    return tf + feats @ theta[1:spec.count]  # row-wise dot product with theta[1..k]
