import numpy as np
import pytest

from dhde.generic.filtering_statistical import (local_window_count,
                                                local_color_statistics,
                                                regularize_covariance)
from dhde.testing.matting_tools import (create_random_image,
                                        create_uniform_image,
                                        brute_force_window_statistics)


def test_local_window_count():
    radius = 2
    denom = local_window_count((9, 11), radius)
    assert np.all(denom[radius:-radius, radius:-radius] == (2*radius + 1)**2)
    assert denom[0, 0] == (radius + 1)**2
    return


@pytest.mark.parametrize("radius", [1, 2])
def test_local_color_statistics_interior(radius):
    img = create_random_image(9, 10, seed=radius)
    mu, cov = local_color_statistics(img, radius)
    assert mu.shape == (9, 10, 3)
    assert cov.shape == (9, 10, 3, 3)

    for i in range(radius, 9 - radius):
        for j in range(radius, 10 - radius):
            mu_hat, cov_hat = brute_force_window_statistics(img, i, j, radius)
            assert np.allclose(mu[i, j], mu_hat)
            assert np.allclose(cov[i, j], cov_hat)
    return


def test_local_color_statistics_symmetric():
    img = create_random_image(6, 6, seed=3)
    _, cov = local_color_statistics(img, 1)
    assert np.allclose(cov, np.swapaxes(cov, -1, -2))
    return


def test_uniform_image_has_no_variance():
    img = create_uniform_image(5, 5, value=.3)
    mu, cov = local_color_statistics(img, 1)
    assert np.allclose(mu, .3)
    assert np.allclose(cov, 0)
    return


def test_regularize_covariance():
    cov = np.zeros((2, 2, 3, 3))
    cov_reg = regularize_covariance(cov, 1e-4)
    assert np.allclose(cov_reg, 1e-4 * np.eye(3))
    assert np.all(cov == 0)
    return
