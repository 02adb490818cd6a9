import numpy as np

from .exceptions import NumericalDegeneracy


def determinant_3x3(S):
    """ determinant of a stack of 3x3 matrices, through cofactor expansion

    Parameters
    ----------
    S : numpy.ndarray, size=(...,3,3), dtype=float
        stack of matrices

    Returns
    -------
    det : numpy.ndarray, size=(...), dtype=float
    """
    S = np.asarray(S, dtype=np.float64)
    assert S.shape[-2:] == (3, 3), ('please provide 3x3 matrices')
    det = S[..., 0, 0] * (S[..., 1, 1] * S[..., 2, 2] -
                          S[..., 1, 2] * S[..., 2, 1]) \
        - S[..., 0, 1] * (S[..., 1, 0] * S[..., 2, 2] -
                          S[..., 1, 2] * S[..., 2, 0]) \
        + S[..., 0, 2] * (S[..., 1, 0] * S[..., 2, 1] -
                          S[..., 1, 1] * S[..., 2, 0])
    return det


def inverse_3x3(S, tol=None):
    """ closed-form inverse of a stack of 3x3 matrices

    Parameters
    ----------
    S : numpy.ndarray, size=(...,3,3), dtype=float
        stack of matrices, typically regularized covariance matrices
    tol : float, optional
        lower bound for the Hadamard ratio :math:`\\det S / \\prod_i S_{ii}`,
        below it a matrix is considered singular. The default is the machine
        precision.

    Returns
    -------
    S_inv : numpy.ndarray, size=(...,3,3), dtype=float
        inverse, computed as the adjugate divided by the determinant

    Raises
    ------
    NumericalDegeneracy
        when a determinant is not finite, or numerically zero

    See Also
    --------
    determinant_3x3

    Notes
    -----
    For a positive definite matrix the Hadamard ratio lies within (0, 1],
    which makes the singularity test independent of the scale of S.
    """
    S = np.asarray(S, dtype=np.float64)
    assert S.shape[-2:] == (3, 3), ('please provide 3x3 matrices')
    if tol is None:
        tol = np.finfo(np.float64).eps

    adj = np.empty_like(S)
    adj[..., 0, 0] = S[..., 1, 1] * S[..., 2, 2] - S[..., 1, 2] * S[..., 2, 1]
    adj[..., 0, 1] = S[..., 0, 2] * S[..., 2, 1] - S[..., 0, 1] * S[..., 2, 2]
    adj[..., 0, 2] = S[..., 0, 1] * S[..., 1, 2] - S[..., 0, 2] * S[..., 1, 1]
    adj[..., 1, 0] = S[..., 1, 2] * S[..., 2, 0] - S[..., 1, 0] * S[..., 2, 2]
    adj[..., 1, 1] = S[..., 0, 0] * S[..., 2, 2] - S[..., 0, 2] * S[..., 2, 0]
    adj[..., 1, 2] = S[..., 0, 2] * S[..., 1, 0] - S[..., 0, 0] * S[..., 1, 2]
    adj[..., 2, 0] = S[..., 1, 0] * S[..., 2, 1] - S[..., 1, 1] * S[..., 2, 0]
    adj[..., 2, 1] = S[..., 0, 1] * S[..., 2, 0] - S[..., 0, 0] * S[..., 2, 1]
    adj[..., 2, 2] = S[..., 0, 0] * S[..., 1, 1] - S[..., 0, 1] * S[..., 1, 0]

    # expansion along the first column
    det = np.asarray(S[..., 0, 0] * adj[..., 0, 0] +
                     S[..., 1, 0] * adj[..., 0, 1] +
                     S[..., 2, 0] * adj[..., 0, 2])

    scale = np.abs(np.prod(np.diagonal(S, axis1=-2, axis2=-1), axis=-1))
    with np.errstate(divide='ignore', invalid='ignore'):
        ratio = np.abs(det) / scale
    singular = ~np.isfinite(det) | ~(ratio > tol)
    if np.any(singular):
        idx = tuple(int(i) for i in
                    np.unravel_index(np.argmax(singular), singular.shape))
        raise NumericalDegeneracy(f'matrix at position {idx} is singular '
                                  f'(determinant {det[idx]:.3e})',
                                  index=idx)

    return adj / det[..., np.newaxis, np.newaxis]
