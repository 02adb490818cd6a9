class ConfigurationError(ValueError):
    """ raised when algorithm parameters are invalid, or when the window does
    not fit inside the image so that no interior pixel exists
    """


class ShapeMismatch(ValueError):
    """ raised when an image is not a three channel array of size (m,n,3)
    """


class NumericalDegeneracy(ArithmeticError):
    """ raised when a (regularized) covariance matrix can not be inverted

    Parameters
    ----------
    message : string
        description of the failure
    index : tuple, optional
        position of the offending matrix within the stack
    """
    def __init__(self, message, index=None):
        super().__init__(message)
        self.index = index
