import numpy as np
import pytest

from dhde.generic.filtering_box import box_sum, box_sum_1d
from dhde.testing.matting_tools import brute_force_box_sum


@pytest.mark.parametrize("radius", [1, 2, 3])
def test_box_sum_interior(radius, ssize=(11, 14)):
    rng = np.random.default_rng(radius)
    Z = rng.random(ssize)

    Z_sum = box_sum(Z, radius)
    for i in range(radius, ssize[0] - radius):
        for j in range(radius, ssize[1] - radius):
            naive = np.sum(Z[i - radius:i + radius + 1,
                             j - radius:j + radius + 1])
            assert np.isclose(Z_sum[i, j], naive)
    return


@pytest.mark.parametrize("radius", [0, 1, 2, 4, 7])
def test_box_sum_clamped_border(radius):
    rng = np.random.default_rng(10 + radius)
    Z = rng.standard_normal((6, 9))
    assert np.allclose(box_sum(Z, radius), brute_force_box_sum(Z, radius))
    return


def test_box_sum_of_ones():
    denom = box_sum(np.ones((4, 5)), 1)
    assert np.array_equal(denom, np.array([[4., 6., 6., 6., 4.],
                                           [6., 9., 9., 9., 6.],
                                           [6., 9., 9., 9., 6.],
                                           [4., 6., 6., 6., 4.]]))
    return


def test_box_sum_1d_axis():
    Z = np.arange(12, dtype=float).reshape(3, 4)
    assert np.allclose(box_sum_1d(Z, 1, axis=1),
                       box_sum_1d(Z.T, 1, axis=0).T)
    assert np.allclose(box_sum_1d(Z, 1, axis=0)[1], Z.sum(axis=0))
    return


def test_box_sum_keeps_shape_and_input():
    Z = np.random.random((7, 3))
    Z_copy = Z.copy()
    assert box_sum(Z, 2).shape == Z.shape
    assert np.array_equal(Z, Z_copy)
    return
