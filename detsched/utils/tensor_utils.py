# detsched/utils/tensor_utils.py

"""Tensor helpers: coerce array-likes (lists, numpy, tensors) onto one dtype/device."""

from __future__ import annotations

from typing import Any, Optional

import numpy as np
import torch

_DTYPES = {
    "float32": torch.float32,
    "float64": torch.float64,
}


def resolve_dtype(name: str | torch.dtype) -> torch.dtype:
    """Map a config string ('float32'/'float64') to a torch dtype."""
    if isinstance(name, torch.dtype):
        return name
    try:
        return _DTYPES[name.lower()]
    except KeyError:
        raise ValueError(f"Unsupported dtype: {name}") from None


def as_float_tensor(x: Any,
                    dtype: torch.dtype = torch.float64,
                    device: Optional[torch.device] = None) -> torch.Tensor:
    """Convert to a floating tensor without copying when already compatible."""
    if isinstance(x, np.ndarray) and not x.flags.writeable:
        x = x.copy()  # torch refuses read-only buffers
    return torch.as_tensor(x, dtype=dtype, device=device)


def as_vector(x: Any,
              dtype: torch.dtype = torch.float64,
              device: Optional[torch.device] = None) -> torch.Tensor:
    """Flatten any array-like into a 1D float tensor (column-vector semantics)."""
    return as_float_tensor(x, dtype=dtype, device=device).reshape(-1)



def get_torch_device(prefer: str = "cuda") -> torch.device:
    """Resolve torch device.

    prefer='cuda' will use GPU if available; otherwise CPU.
    """
    if prefer == "cuda" and torch.cuda.is_available():
        return torch.device("cuda")   # GPU execution path
    return torch.device("cpu")        # fallback path
