import logging
from pathlib import Path

import torch

from detsched import PairKernelConfig, PointSet, build_logger, build_pair_kernel_from_config, build_point_kernel
from detsched.utils.config_loader import merge_configs

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_default_config_file_loads():
    cfg = PairKernelConfig.from_yaml([REPO_ROOT / "configs" / "kernel.yaml"])
    assert cfg.feature_count == 2
    assert cfg.quality_power == 2.0
    assert cfg.torch_dtype == torch.float64


def test_later_configs_override_earlier(tmp_path):
    base = tmp_path / "base.yaml"
    base.write_text("kernel:\n  feature_count: 2\n  quality:\n    power: 2.0\n", encoding="utf-8")
    override = tmp_path / "override.yaml"
    override.write_text("kernel:\n  quality:\n    power: 4.0\n", encoding="utf-8")

    merged = merge_configs([base, override])
    assert merged["kernel"]["feature_count"] == 2
    assert merged["kernel"]["quality"]["power"] == 4.0


def test_build_from_config_matches_direct_call():
    pts = PointSet.from_coords([(0.0, 0.0), (10.0, 0.0), (0.0, 10.0)],
                               [(1.0, 0.0), (11.0, 0.0), (0.0, 11.0)])
    S = torch.eye(3, dtype=torch.float64)
    cfg = PairKernelConfig.from_dict({"kernel": {"feature_count": 2, "quality": {"power": 3.0}}})
    from_cfg = build_pair_kernel_from_config(pts, S, [1.0, 0.5], cfg)
    direct = build_point_kernel(pts, S, [1.0, 0.5], feature_count=2,
                                quality_fn=lambda v: abs(v) ** 3.0)
    assert torch.allclose(from_cfg.kernel, direct.kernel)
    assert torch.allclose(from_cfg.quality, direct.quality)


def test_build_logger_is_idempotent(tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    logger = build_logger("detsched-test", "DEBUG", log_file)
    again = build_logger("detsched-test", "DEBUG", log_file)
    assert logger is again
    assert len(logger.handlers) == 2
    assert logger.level == logging.DEBUG
    logger.info("kernel built")
    for h in logger.handlers:
        h.flush()
    assert "kernel built" in log_file.read_text(encoding="utf-8")
