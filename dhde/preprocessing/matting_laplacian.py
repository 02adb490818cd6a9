# matting Laplacian

import logging

import numpy as np
import scipy.sparse

from ..generic.unit_check import check_matting_parameters, check_sparse_format
from .matting_affinity import get_matting_affinities

logger = logging.getLogger(__name__)


def accumulate_affinities(rows, cols, vals, shape):
    """ put affinity triplets into a sparse matrix, summing duplicates

    Parameters
    ----------
    rows, cols : numpy.ndarray, size=(q,), dtype=int
        coordinates of the entries
    vals : numpy.ndarray, size=(q,), dtype=float
        values of the entries
    shape : tuple
        dimension of the matrix

    Returns
    -------
    W : scipy.sparse.csr_matrix, size=shape
        matrix where entries sharing a coordinate are added together
    """
    rows, cols, vals = np.asarray(rows), np.asarray(cols), np.asarray(vals)
    assert rows.shape == cols.shape == vals.shape, \
        ('please provide arrays of equal shape')
    W = scipy.sparse.coo_matrix((vals, (rows, cols)), shape=shape).tocsr()
    W.sum_duplicates()
    logger.debug('accumulated %d triplets into %d non-zeros', vals.size,
                 W.nnz)
    return W


def affinity_to_laplacian(W):
    """ graph Laplacian of a weighted adjacency matrix

    Parameters
    ----------
    W : scipy.sparse.spmatrix, size=(N,N)
        affinity matrix

    Returns
    -------
    L : scipy.sparse.csr_matrix, size=(N,N)
        Laplacian, that is L = D - W, where D is the diagonal matrix holding
        the row sums of W. Hence all rows of L sum to zero.
    """
    degrees = np.asarray(W.sum(axis=1)).ravel()
    D = scipy.sparse.diags(degrees, format='csr')
    L = (D - W).tocsr()
    return L


def compute_laplacian(img, eps=1e-5, win_rad=1, order='C', n_jobs=1,
                      chunk_size=None, format='csr'):
    """ computes matting Laplacian for a given image.

    Parameters
    ----------
    img : numpy.ndarray, size=(m,n,3), ndim=3, dtype=float, range=0...1
        input image
    eps : float, {x ∈ ℝ | x > 0}
        regularization parameter controlling alpha smoothness, from
        Equation 12 of [Le08]_. The default is 1e-5.
    win_rad : integer, {x ∈ ℕ | x ≥ 1}
        radius of window used to build matting Laplacian, that is the radius
        of :math:`\\omega_k` in Equation 12. The default is 1.
    order : {'C', 'F'}
        linear pixel indexing, row-major or column-major. The default is 'C'.
    n_jobs : integer, {x ∈ ℕ | x ≥ 1}
        number of threads used for the window affinities. The default is 1.
    chunk_size : integer, optional
        number of windows processed together. The default is one image row.
    format : string
        scipy sparse format of the output. The default is 'csr'.

    Returns
    -------
    L : scipy.sparse.spmatrix, size=(m*n,m*n)
        sparse matrix holding Matting Laplacian, symmetric and with rows
        summing to zero.

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
    get_laplacian, dhde.preprocessing.matting_affinity.get_matting_affinities

    Notes
    -----
    Pixels closer than win_rad to the image border are not the center of a
    window, but are part of the windows of their neighbours.

    References
    ----------
    .. [Le08] Levin et al. "A closed-form solution to natural image matting"
              IEEE Transactions on pattern analysis and machine intelligence.
              vol.30(2) pp.228-242, 2008.
    .. [ZS11] Zhuo & Sim "Defocus map estimation from a single image"
              Pattern recognition, vol.44(9) pp.1852-1858, 2011.
    """
    format = check_sparse_format(format)
    rows, cols, vals = get_matting_affinities(img, eps=eps, win_rad=win_rad,
                                              order=order, n_jobs=n_jobs,
                                              chunk_size=chunk_size)
    m, n = np.shape(img)[:2]
    W = accumulate_affinities(rows, cols, vals, (m * n, m * n))
    L = affinity_to_laplacian(W)
    return L.asformat(format)


def get_laplacian(img, params):
    """ computes matting Laplacian, with settings given as a mapping

    Parameters
    ----------
    img : numpy.ndarray, size=(m,n,3), ndim=3, dtype=float, range=0...1
        input image
    params : dict
        settings, the regularization under the key "eps" (or "epsilon",
        "propEps") and the window radius under "win_rad" (or "radius",
        "propRadius"). Other keywords of compute_laplacian are optional.

    Returns
    -------
    L : scipy.sparse.spmatrix, size=(m*n,m*n)
        sparse matrix holding Matting Laplacian.

    See Also
    --------
    compute_laplacian

    Examples
    --------
    >>> import numpy as np
    >>> img = np.random.random((8, 8, 3))
    >>> L = get_laplacian(img, {'propEps': 1e-5, 'propRadius': 1})
    >>> L.shape
    (64, 64)
    """
    kwargs = check_matting_parameters(params)
    return compute_laplacian(img, **kwargs)
