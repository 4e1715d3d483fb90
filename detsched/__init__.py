"""detsched: L-ensemble kernels for determinantal scheduling of TX/RX pairs.

Provides:
- Pair geometry (TX -> RX cross distances, own-pair rescaling).
- Quality model q(theta, f) built from nearest-neighbour features.
- Kernel assembly L = diag(q) S diag(q) for a DPP over the pairs.
"""

from detsched.errors import InvalidParameterError
from detsched.physics.geometry import PointSet
from detsched.kernels.features import FeatureMode, FeatureSpec, resolve_feature_mode
from detsched.kernels.quality import abs_power_quality, default_quality, vectorized
from detsched.kernels.pair_kernel import PairKernel, assemble_kernel, build_pair_kernel, build_point_kernel
from detsched.kernels.pair_kernel import build_pair_kernel_from_config
from detsched.kernels.config import PairKernelConfig
from detsched.utils.logger import build_logger
