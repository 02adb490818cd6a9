# box filtering through cumulative sums

import numpy as np


def box_sum_1d(Z, radius, axis=0):
    """ sliding window sum along one axis, independent of the window size

    Parameters
    ----------
    Z : numpy.ndarray, dtype=float
        data array
    radius : integer, {x ∈ ℕ}
        half width of the window, the window spans 2*radius+1 samples
    axis : integer
        axis along which the window slides

    Returns
    -------
    Z_sum : numpy.ndarray, dtype=float
        windowed sums, of the same size as Z

    Notes
    -----
    Near the border the window is clamped to the extent of the array, hence
    only the available samples are summed. For an array with :math:`l`
    samples along the axis, the output at position :math:`i` is

    .. math:: C[\\min(i+r+1, l)] - C[\\max(i-r, 0)]

    where :math:`C` is the cumulative sum with a leading zero.
    """
    Z = np.asarray(Z, dtype=np.float64)
    Z = np.moveaxis(Z, axis, 0)
    l = Z.shape[0]

    Z_cum = np.zeros((l + 1,) + Z.shape[1:], dtype=np.float64)
    np.cumsum(Z, axis=0, out=Z_cum[1:])

    idx = np.arange(l)
    upper = np.minimum(idx + radius + 1, l)
    lower = np.maximum(idx - radius, 0)
    Z_sum = Z_cum[upper] - Z_cum[lower]
    return np.moveaxis(Z_sum, 0, axis)


def box_sum(Z, radius):
    """ O(1) box filtering using cumulative sums

    Parameters
    ----------
    Z : numpy.ndarray, size=(m,n), dtype=float
        grid with scalar values
    radius : integer, {x ∈ ℕ}
        radius of the square window

    Returns
    -------
    Z_sum : numpy.ndarray, size=(m,n), dtype=float
        sum over the (2*radius+1, 2*radius+1) window centered at every cell

    See Also
    --------
    box_sum_1d

    Notes
    -----
    The running time does not depend on the radius, the filter is applied
    first along the rows then along the columns. Cells closer than the radius
    to a border sum over the part of the window that lies inside the grid.

    Examples
    --------
    >>> import numpy as np
    >>> box_sum(np.ones((4, 5)), 1)
    array([[4., 6., 6., 6., 4.],
           [6., 9., 9., 9., 6.],
           [6., 9., 9., 9., 6.],
           [4., 6., 6., 6., 4.]])
    """
    Z = np.asarray(Z)
    assert Z.ndim == 2, ('please provide a two dimensional array')
    radius = int(radius)
    assert radius >= 0, ('radius should be positive')

    Z_sum = box_sum_1d(Z, radius, axis=0)
    Z_sum = box_sum_1d(Z_sum, radius, axis=1)
    return Z_sum
