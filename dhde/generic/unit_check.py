import numbers
import warnings

import numpy as np

from .exceptions import ConfigurationError, ShapeMismatch

SPARSE_FORMATS = ('csr', 'csc', 'coo', 'lil', 'dok', 'dia', 'bsr')

# aliases under which a setting can be given, the first is the keyword name
PARAMETER_ALIASES = {
    'eps': ('eps', 'epsilon', 'propEps'),
    'win_rad': ('win_rad', 'radius', 'propRadius'),
    'order': ('order',),
    'n_jobs': ('n_jobs',),
    'chunk_size': ('chunk_size',),
    'format': ('format',),
}


def correct_floating_parameter(a):
    # it is possible that a numpy array is given
    if type(a) in (np.ma.core.MaskedArray, np.ndarray):
        if a.size != 1:
            raise ConfigurationError('please provide one parameter')
        a = a.ravel()[0]
    if type(a) in (list, tuple):
        if len(a) != 1:
            raise ConfigurationError('please provide one parameter')
        a = a[0]

    if isinstance(a, bool) or not isinstance(a, numbers.Real):
        raise ConfigurationError('please provide a float')
    return float(a)


def correct_integer_parameter(a):
    if type(a) in (np.ma.core.MaskedArray, np.ndarray):
        if a.size != 1:
            raise ConfigurationError('please provide one parameter')
        a = a.ravel()[0]
    if type(a) in (list, tuple):
        if len(a) != 1:
            raise ConfigurationError('please provide one parameter')
        a = a[0]

    if isinstance(a, bool):
        raise ConfigurationError('please provide an integer')
    if isinstance(a, numbers.Integral):
        return int(a)
    if isinstance(a, numbers.Real) and float(a).is_integer():
        return int(a)
    raise ConfigurationError('please provide an integer')


def check_rgb_image(img):
    """ verify that an image is a finite colour image

    Parameters
    ----------
    img : numpy.ndarray, size=(m,n,3), dtype=float
        colour image, intensities are expected to be within 0...1

    Returns
    -------
    img : numpy.ndarray, size=(m,n,3), dtype=float
        same image, as floating point array

    Raises
    ------
    ShapeMismatch
        when the array is not three dimensional with three bands
    ValueError
        when the image holds NaN or infinite values
    """
    img = np.asarray(img)
    if img.ndim != 3 or img.shape[2] != 3:
        raise ShapeMismatch('please provide an image of size (m,n,3), got '
                            f'{img.shape}')
    if not np.issubdtype(img.dtype, np.floating):
        img = img.astype(np.float64)
    if not np.all(np.isfinite(img)):
        raise ValueError('image contains non-finite values')
    if img.size and (img.min() < -.5 or img.max() > 1.5):
        warnings.warn("image intensities seem not to be within 0...1")
    return img


def check_window_radius(win_rad, shape):
    """ verify the window radius, and that at least one window fits

    Parameters
    ----------
    win_rad : integer, {x ∈ ℕ | x ≥ 1}
        radius of the square window
    shape : tuple
        dimension of the image, only the first two entries are used

    Returns
    -------
    win_rad : integer
    """
    win_rad = correct_integer_parameter(win_rad)
    if win_rad < 1:
        raise ConfigurationError('window radius should be at least one')
    m, n = shape[:2]
    if 2 * win_rad >= min(m, n):
        raise ConfigurationError(f'a window of radius {win_rad} does not fit '
                                 f'inside an image of size ({m},{n})')
    return win_rad


def check_regularization(eps):
    eps = correct_floating_parameter(eps)
    if not np.isfinite(eps) or eps <= 0:
        raise ConfigurationError('regularization should be a positive number')
    return eps


def check_assembly_options(order='C', n_jobs=1, chunk_size=None):
    if order not in ('C', 'F'):
        raise ConfigurationError("order should be either 'C' or 'F'")
    n_jobs = correct_integer_parameter(n_jobs)
    if n_jobs < 1:
        raise ConfigurationError('number of jobs should be at least one')
    if chunk_size is not None:
        chunk_size = correct_integer_parameter(chunk_size)
        if chunk_size < 1:
            raise ConfigurationError('chunk size should be at least one')
    return order, n_jobs, chunk_size


def check_sparse_format(format):
    if format not in SPARSE_FORMATS:
        raise ConfigurationError(f'unknown sparse format: {format}')
    return format


def check_matting_parameters(params):
    """ translate a parameter mapping to keyword arguments

    Parameters
    ----------
    params : dict
        algorithm settings, the regularization under one of the keys
        "eps", "epsilon" or "propEps" and the window radius under one of
        "win_rad", "radius" or "propRadius". The keys "order", "n_jobs",
        "chunk_size" and "format" are optional.

    Returns
    -------
    kwargs : dict
        settings keyed by their keyword name

    Examples
    --------
    >>> check_matting_parameters({'propEps': 1e-5, 'propRadius': 1})
    {'eps': 1e-05, 'win_rad': 1}
    """
    if not hasattr(params, 'keys'):
        raise ConfigurationError('please provide the parameters as a mapping')

    lookup = {alias: key for key, aliases in PARAMETER_ALIASES.items()
              for alias in aliases}
    unknown = sorted(set(params.keys()) - set(lookup.keys()))
    if unknown:
        raise ConfigurationError(f'unknown parameter(s): {", ".join(unknown)}')

    kwargs = {}
    for alias, value in params.items():
        key = lookup[alias]
        if key in kwargs:
            raise ConfigurationError(f'parameter "{key}" is given twice')
        kwargs[key] = value

    for key in ('eps', 'win_rad'):
        if key not in kwargs:
            raise ConfigurationError(f'parameter "{key}" is missing')
    return kwargs
