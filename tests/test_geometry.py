import logging
import math

import numpy as np
import pytest
import torch

from detsched.errors import InvalidParameterError
from detsched.physics.geometry import (
    PointSet,
    cross_distances,
    own_pair_distances,
    rescaled_neighbour_distances,
)

TX = [(0.0, 0.0), (10.0, 0.0), (0.0, 10.0)]
RX = [(1.0, 0.0), (11.0, 0.0), (0.0, 11.0)]


def test_cross_distances_tx_to_rx():
    pts = PointSet.from_coords(TX, RX)
    d = cross_distances(pts)
    expected = torch.tensor([
        [1.0, 11.0, 11.0],
        [9.0, 1.0, math.sqrt(221.0)],
        [math.sqrt(101.0), math.sqrt(221.0), 1.0],
    ], dtype=torch.float64)
    assert d.shape == (3, 3)
    assert torch.allclose(d, expected)
    assert torch.allclose(own_pair_distances(d), torch.ones(3, dtype=torch.float64))


def test_rescaling_divides_each_row_by_its_own_link_length():
    pts = PointSet.from_coords([(0.0, 0.0), (5.0, 0.0)], [(2.0, 0.0), (5.0, 1.0)])
    D = rescaled_neighbour_distances(pts)
    assert math.isclose(D[0, 1].item(), math.sqrt(26.0) / 2.0)
    assert math.isclose(D[1, 0].item(), 3.0)


def test_own_receiver_excluded_with_infinity():
    pts = PointSet.from_coords(TX, RX)
    D = rescaled_neighbour_distances(pts)
    assert torch.all(torch.isinf(torch.diagonal(D)))
    off = D[~torch.eye(3, dtype=torch.bool)]
    assert torch.isfinite(off).all()


def test_from_xy_flattens_numpy_vectors():
    xx_tx = np.array([[0.0], [10.0], [0.0]])
    yy_tx = np.array([0.0, 0.0, 10.0])
    pts = PointSet.from_xy(xx_tx, yy_tx, np.array([1.0, 11.0, 0.0]), np.array([0.0, 0.0, 11.0]))
    ref = PointSet.from_coords(TX, RX)
    assert pts.size == 3
    assert torch.equal(pts.tx, ref.tx)
    assert torch.equal(pts.rx, ref.rx)


def test_mismatched_pairs_rejected():
    with pytest.raises(InvalidParameterError):
        PointSet.from_coords(TX, RX[:2])
    with pytest.raises(InvalidParameterError):
        PointSet.from_xy([0.0, 1.0], [0.0, 1.0], [0.0], [0.0])


def test_zero_length_link_propagates_non_finite_values(caplog):
    pts = PointSet.from_coords([(0.0, 0.0), (10.0, 0.0), (0.0, 10.0)],
                               [(0.0, 0.0), (11.0, 0.0), (0.0, 11.0)])
    with caplog.at_level(logging.WARNING, logger="detsched.physics.geometry"):
        D = rescaled_neighbour_distances(pts)
    assert "zero transmitter-receiver distance" in caplog.text
    assert not torch.isfinite(D[0]).any()
    assert torch.isfinite(D[1, [0, 2]]).all()
