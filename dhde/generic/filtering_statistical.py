import numpy as np

from .filtering_box import box_sum

# the six unique entries of a symmetric 3x3 matrix
_COVARIANCE_PAIRS = ((0, 0), (0, 1), (0, 2), (1, 1), (1, 2), (2, 2))


def local_window_count(shape, radius):
    """ number of pixels within each (clamped) window

    Parameters
    ----------
    shape : tuple
        dimension of the grid, only the first two entries are used
    radius : integer, {x ∈ ℕ}
        radius of the square window

    Returns
    -------
    denom : numpy.ndarray, size=(m,n), dtype=float
        pixel count, equal to (2*radius+1)**2 for interior pixels
    """
    return box_sum(np.ones(shape[:2], dtype=np.float64), radius)


def local_color_statistics(img, radius):
    """ mean colour vector and colour covariance within a sliding window

    Parameters
    ----------
    img : numpy.ndarray, size=(m,n,3), dtype=float
        colour image
    radius : integer, {x ∈ ℕ}
        radius of the square window

    Returns
    -------
    mu : numpy.ndarray, size=(m,n,3), dtype=float
        local mean of every band
    cov : numpy.ndarray, size=(m,n,3,3), dtype=float
        local covariance between the bands, not regularized

    See Also
    --------
    regularize_covariance

    Notes
    -----
    The statistics are built from box sums of the bands and of the band
    products,

    .. math:: \\Sigma_{cd} = \\frac{1}{|\\omega|}\\sum_{\\omega} I_c I_d -
              \\mu_c \\mu_d

    only pixels whose window lies fully inside the image have exact window
    statistics, the others are computed over the clamped window.
    """
    img = np.asarray(img, dtype=np.float64)
    m, n, b = img.shape
    denom = local_window_count((m, n), radius)

    mu = np.zeros((m, n, b), dtype=np.float64)
    for c in range(b):
        mu[..., c] = box_sum(img[..., c], radius) / denom

    cov = np.zeros((m, n, b, b), dtype=np.float64)
    for c, d in _COVARIANCE_PAIRS:
        v = box_sum(img[..., c] * img[..., d], radius) / denom - \
            mu[..., c] * mu[..., d]
        cov[..., c, d], cov[..., d, c] = v, v
    return mu, cov


def regularize_covariance(cov, eps):
    """ add a multiple of the identity, so that the covariance is definite

    Parameters
    ----------
    cov : numpy.ndarray, size=(...,3,3), dtype=float
        stack of covariance matrices
    eps : float, {x ∈ ℝ | x > 0}
        regularization strength

    Returns
    -------
    cov_reg : numpy.ndarray, size=(...,3,3), dtype=float
    """
    return cov + eps * np.eye(cov.shape[-1])
