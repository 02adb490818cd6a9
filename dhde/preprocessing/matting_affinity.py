# pixel affinities within local windows, as used by the matting Laplacian

import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from ..generic.exceptions import NumericalDegeneracy
from ..generic.filtering_statistical import (local_color_statistics,
                                             regularize_covariance)
from ..generic.matrix_tools import inverse_3x3
from ..generic.unit_check import (check_rgb_image, check_window_radius,
                                  check_regularization, check_assembly_options)

logger = logging.getLogger(__name__)


def _rolling_block(A, block=(3, 3)):
    """Applies sliding window to given matrix."""
    shape = (A.shape[0] - block[0] + 1, A.shape[1] - block[1] + 1) + block
    strides = (A.strides[0], A.strides[1]) + A.strides

    A_rolls = np.lib.stride_tricks.as_strided(A, shape=shape, strides=strides,
                                              writeable=False)
    return A_rolls


def get_window_indices(m, n, win_rad=1, order='C'):
    """ linear pixel indices of every window that lies within the image

    Parameters
    ----------
    m, n : integer
        dimension of the image
    win_rad : integer, {x ∈ ℕ | x ≥ 1}
        radius of the window
    order : {'C', 'F'}
        linear indexing of pixel (i,j), 'C' for row-major, that is i*n + j,
        'F' for column-major, that is j*m + i

    Returns
    -------
    win_inds : numpy.ndarray, size=(m-2*win_rad,n-2*win_rad,k), dtype=int
        indices of the k=(2*win_rad+1)**2 pixels within the window centered
        at each interior pixel, the window itself is traversed row by row

    Notes
    -----
    The following coordinate system is used here:

        .. code-block:: text

          indexing   |
          system 'ij'|
                     |
                     |       j
             --------+-------->
                     |
                     |
          image      | i
          based      v

    """
    win_diam = 2 * win_rad + 1
    indsM = np.arange(m * n, dtype=np.int64).reshape((m, n), order=order)
    # as_strided needs a contiguous view to derive the strides from
    indsM = np.ascontiguousarray(indsM)

    win_inds = _rolling_block(indsM, block=(win_diam, win_diam))
    win_inds = win_inds.reshape(m - 2 * win_rad, n - 2 * win_rad,
                                win_diam ** 2)
    return win_inds


def get_window_affinity(roi, S_inv):
    """ affinity between all pixel pairs of a stack of windows

    Parameters
    ----------
    roi : numpy.ndarray, size=(p,k,3), dtype=float
        colours within each window, with the window mean removed
    S_inv : numpy.ndarray, size=(p,3,3), dtype=float
        inverse of the regularized colour covariance of each window

    Returns
    -------
    A : numpy.ndarray, size=(p,k,k), dtype=float
        symmetric affinity matrices

    Notes
    -----
    The affinity follows from Equation 12 in [Le08]_,

    .. math:: A_{ij} = \\frac{1}{|\\omega|}(1 + (I_i - \\mu)^T
              (\\Sigma + \\epsilon I_3)^{-1} (I_j - \\mu))

    References
    ----------
    .. [Le08] Levin et al. "A closed-form solution to natural image matting"
              IEEE Transactions on pattern analysis and machine intelligence.
              vol.30(2) pp.228-242, 2008.
    """
    k = roi.shape[1]
    X = np.einsum('...ij,...jk->...ik', roi, S_inv)
    A = (1. + np.einsum('...ij,...kj->...ik', X, roi)) / k
    return A


def _fill_affinity_block(rows, cols, vals, ravelImg, win_inds, mu, S_inv,
                         start, stop):
    """ write the triplets of the interior pixels start...stop

    Every interior pixel owns k**2 consecutive entries of the output arrays,
    hence blocks never overlap.
    """
    k = win_inds.shape[1]
    inds = win_inds[start:stop]

    roi = ravelImg[inds] - mu[start:stop, np.newaxis, :]
    A = get_window_affinity(roi, S_inv[start:stop])

    arena = slice(start * k ** 2, stop * k ** 2)
    rows[arena] = np.repeat(inds, k, axis=1).ravel()
    cols[arena] = np.tile(inds, k).ravel()
    vals[arena] = A.ravel()
    return stop - start


def get_matting_affinities(img, eps=1e-5, win_rad=1, order='C', n_jobs=1,
                           chunk_size=None):
    """ computes the affinity triplets of all windows within an image

    Parameters
    ----------
    img : numpy.ndarray, size=(m,n,3), dtype=float, range=0...1
        colour image
    eps : float, {x ∈ ℝ | x > 0}
        regularization of the colour covariance. The default is 1e-5.
    win_rad : integer, {x ∈ ℕ | x ≥ 1}
        radius of the window. The default is 1.
    order : {'C', 'F'}
        linear pixel indexing, row-major or column-major. The default is 'C'.
    n_jobs : integer, {x ∈ ℕ | x ≥ 1}
        number of threads, the interior pixels are split into blocks that are
        processed concurrently. The default is 1.
    chunk_size : integer, optional
        number of interior pixels processed together. The default is one
        row of interior pixels.

    Returns
    -------
    rows, cols : numpy.ndarray, size=(k**2*(m-2*win_rad)*(n-2*win_rad),)
        linear pixel indices of each pair, dtype=int
    vals : numpy.ndarray, size=(k**2*(m-2*win_rad)*(n-2*win_rad),)
        affinity of each pair, dtype=float

    Raises
    ------
    ShapeMismatch
        when the image does not have three bands
    ConfigurationError
        when the parameters are invalid or no window fits within the image
    NumericalDegeneracy
        when a regularized covariance matrix is singular

    See Also
    --------
    dhde.preprocessing.matting_laplacian.compute_laplacian

    Notes
    -----
    Pairs can appear in several windows, hence coordinates are repeated, and
    should be summed when the triplets are put into a sparse matrix.
    """
    img = check_rgb_image(img)
    win_rad = check_window_radius(win_rad, img.shape)
    eps = check_regularization(eps)
    order, n_jobs, chunk_size = check_assembly_options(order, n_jobs,
                                                       chunk_size)

    m, n, b = img.shape
    c_h, c_w = m - 2 * win_rad, n - 2 * win_rad
    win_size = (2 * win_rad + 1) ** 2
    n_win = c_h * c_w
    if chunk_size is None:
        chunk_size = c_w

    interior = (slice(win_rad, m - win_rad), slice(win_rad, n - win_rad))
    mu, cov = local_color_statistics(img, win_rad)
    mu = mu[interior].reshape(n_win, b)
    S = regularize_covariance(cov[interior], eps)
    try:
        S_inv = inverse_3x3(S).reshape(n_win, b, b)
    except NumericalDegeneracy as e:
        i, j = e.index[0] + win_rad, e.index[1] + win_rad
        raise NumericalDegeneracy(f'covariance of the window centered at '
                                  f'pixel ({i},{j}) is singular, consider a '
                                  f'larger regularization', index=(i, j)) \
            from e

    win_inds = get_window_indices(m, n, win_rad, order).reshape(n_win,
                                                                 win_size)
    ravelImg = img.reshape(m * n, b, order=order)

    n_vals = win_size ** 2 * n_win
    rows = np.empty(n_vals, dtype=np.int64)
    cols = np.empty(n_vals, dtype=np.int64)
    vals = np.empty(n_vals, dtype=np.float64)

    blocks = [(start, min(start + chunk_size, n_win))
              for start in range(0, n_win, chunk_size)]
    logger.debug('assembling %d affinities of %d windows in %d block(s)',
                 n_vals, n_win, len(blocks))

    def fill(block):
        return _fill_affinity_block(rows, cols, vals, ravelImg, win_inds,
                                    mu, S_inv, *block)

    if n_jobs == 1 or len(blocks) == 1:
        for block in blocks:
            fill(block)
    else:
        with ThreadPoolExecutor(max_workers=n_jobs) as executor:
            # consume the results, so exceptions of a worker propagate
            for _ in executor.map(fill, blocks):
                pass
    return rows, cols, vals
