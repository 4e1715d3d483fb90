# detsched/utils/config_loader.py

"""Config loading and merging.

- Kernel settings (feature count, quality power, dtype, device) live in YAML.
- Several YAML files can be layered; later files override earlier ones.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping

import yaml


def _deep_update(base: Dict[str, Any], other: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively update a nested dict; values in `other` win."""
    for k, v in other.items():
        if isinstance(v, Mapping) and isinstance(base.get(k), Mapping):
            base[k] = _deep_update(dict(base[k]), v)
        else:
            base[k] = copy.deepcopy(v)
    return base


def load_yaml(path: str | Path) -> Dict[str, Any]:
    """Load a YAML file into a dict (empty file -> {})."""
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def merge_configs(paths: Iterable[str | Path]) -> Dict[str, Any]:
    """Merge multiple YAML configs in order."""
    merged: Dict[str, Any] = {}
    for p in paths:
        merged = _deep_update(merged, load_yaml(p))
    return merged

