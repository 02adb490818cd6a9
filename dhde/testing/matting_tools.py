import numpy as np
from skimage import data
from skimage.transform import resize
from skimage.util import img_as_float

# artificial creation functions


def create_sample_image(m=2**4, n=2**4, seed=None):
    """ create a small colour image from a natural scene

    Parameters
    ----------
    m, n : integer
        dimension of the image
    seed : integer, optional
        when given, a random crop is taken, otherwise the top left corner
        of the downsampled scene is used

    Returns
    -------
    img : numpy.ndarray, size=(m,n,3), dtype=float, range=0...1
        colour image
    """
    I = img_as_float(data.astronaut())
    I = resize(I, (4 * m, 4 * n), anti_aliasing=True)
    if seed is None:
        i, j = 0, 0
    else:
        rng = np.random.default_rng(seed)
        i, j = rng.integers(0, 3 * m + 1), rng.integers(0, 3 * n + 1)
    img = np.clip(I[i:i + m, j:j + n, :3], 0., 1.)
    return img


def create_random_image(m=2**3, n=2**3, seed=None):
    rng = np.random.default_rng(seed)
    return rng.random((m, n, 3))


def create_uniform_image(m=5, n=5, value=.5):
    """ create a grayscale image, with one intensity, stored as colour image
    """
    I = np.full((m, n), value, dtype=np.float64)
    return np.repeat(I[..., np.newaxis], 3, axis=2)


def create_random_spd_3x3(n=10, seed=None):
    """ create a stack of symmetric positive definite 3x3 matrices
    """
    rng = np.random.default_rng(seed)
    A = rng.standard_normal((n, 3, 3))
    return np.einsum('...ij,...kj->...ik', A, A) + .1 * np.eye(3)


def brute_force_box_sum(Z, radius):
    """ windowed sum through direct summation over the clamped window
    """
    m, n = Z.shape
    Z_sum = np.zeros((m, n), dtype=np.float64)
    for i in range(m):
        for j in range(n):
            Z_sum[i, j] = np.sum(Z[max(i - radius, 0):i + radius + 1,
                                   max(j - radius, 0):j + radius + 1])
    return Z_sum


def brute_force_window_statistics(img, i, j, radius):
    """ mean and (biased) covariance of the window centered at pixel (i,j)
    """
    roi = img[i - radius:i + radius + 1, j - radius:j + radius + 1, :]
    roi = roi.reshape(-1, img.shape[2])
    mu = np.mean(roi, axis=0)
    cov = (roi - mu).T @ (roi - mu) / roi.shape[0]
    return mu, cov


def brute_force_laplacian(img, eps, radius):
    """ dense matting Laplacian with a loop over all windows, row-major
    """
    m, n, b = img.shape
    k = (2 * radius + 1)**2
    W = np.zeros((m * n, m * n))
    indsM = np.arange(m * n).reshape(m, n)
    for i in range(radius, m - radius):
        for j in range(radius, n - radius):
            mu, cov = brute_force_window_statistics(img, i, j, radius)
            inds = indsM[i - radius:i + radius + 1,
                         j - radius:j + radius + 1].ravel()
            roi = img[i - radius:i + radius + 1,
                      j - radius:j + radius + 1, :].reshape(k, b) - mu
            A = (1 + roi @ np.linalg.inv(cov + eps * np.eye(b)) @ roi.T) / k
            W[np.ix_(inds, inds)] += A
    return np.diag(W.sum(axis=1)) - W


# testing functions, tolerances are relative to the largest entry
def _test_laplacian_symmetry(L, tolerance=1e-10):
    assert L.shape[0] == L.shape[1], 'Laplacian should be square'
    scale = max(1., abs(L).max())
    assert abs(L - L.T).max() <= tolerance * scale, \
        'Laplacian is not symmetric'
    return


def _test_laplacian_row_sums(L, tolerance=1e-10):
    scale = max(1., abs(L).max())
    row_sums = np.asarray(L.sum(axis=1)).ravel()
    assert np.all(np.abs(row_sums) <= tolerance * scale), \
        'rows of the Laplacian do not sum to zero'
    return
