# detsched/kernels/config.py

"""Kernel settings resolved from merged YAML configs (see configs/kernel.yaml)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

import torch

from detsched.kernels.quality import DEFAULT_POWER
from detsched.utils.config_loader import merge_configs
from detsched.utils.tensor_utils import get_torch_device, resolve_dtype


@dataclass(frozen=True)
class PairKernelConfig:
    feature_count: int = 0
    quality_power: float = DEFAULT_POWER
    dtype: str = "float64"
    prefer_device: str = "cpu"

    @property
    def torch_dtype(self) -> torch.dtype:
        return resolve_dtype(self.dtype)

    def device(self) -> torch.device:
        return get_torch_device(self.prefer_device)

    @staticmethod
    def from_dict(cfg: Mapping[str, Any]) -> "PairKernelConfig":
        """Read the `kernel` and `device` sections of a merged config."""
        k = cfg.get("kernel", {}) or {}
        quality = k.get("quality", {}) or {}
        dev = cfg.get("device", {}) or {}
        return PairKernelConfig(
            feature_count=int(k.get("feature_count", 0)),
            quality_power=float(quality.get("power", DEFAULT_POWER)),
            dtype=str(k.get("dtype", "float64")),
            prefer_device=str(dev.get("prefer", "cpu")),
        )

    @staticmethod
    def from_yaml(paths: Iterable[str | Path]) -> "PairKernelConfig":
        return PairKernelConfig.from_dict(merge_configs(paths))
