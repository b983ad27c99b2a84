"""
Utility functions for the Elliptica package.
"""

import warnings
from typing import Type
from .config import config


class DegenerateGeometryWarning(UserWarning):
    """Initial offsets do not form a proper triangle, so the orbit angle is NaN."""


def validation_error(message: str, error_class: Type[Exception] = ValueError,
                     warning_class: Type[Warning] = UserWarning):
    """
    Raise error or warn based on config.STRICT_VALIDATION.
    
    This function provides consistent validation behavior across the package.
    When STRICT_VALIDATION is True, raises the specified exception.
    When False (default), issues a warning of ``warning_class`` instead.
    
    Parameters
    ----------
    message : str
        Validation error message
    error_class : Type[Exception], optional
        Exception class to raise if STRICT_VALIDATION is True.
        Default: ValueError
    warning_class : Type[Warning], optional
        Warning category issued if STRICT_VALIDATION is False.
        Default: UserWarning
    
    Raises
    ------
    Exception (of type error_class)
        If config.STRICT_VALIDATION is True
    
    Warns
    -----
    Warning (of type warning_class)
        If config.STRICT_VALIDATION is False
    
    Examples
    --------
    >>> from elliptica.utils import validation_error
    >>> from elliptica import config
    >>> config.STRICT_VALIDATION = True
    >>> validation_error("Invalid value")  # Raises ValueError
    
    >>> config.STRICT_VALIDATION = False
    >>> validation_error("Invalid value")  # Issues warning
    """
    if config.STRICT_VALIDATION:
        raise error_class(message)
    else:
        warnings.warn(message, warning_class, stacklevel=2)


def print_observer(name: str, value: float):
    """
    Diagnostic observer that prints each construction value to the console.
    
    Pass as ``Orbit(..., observer=print_observer)`` to get one line per
    derived quantity, e.g. ``aphelion 15.0`` or ``angle 0.6435(radians)``.
    """
    if name == 'angle':
        print(f"{name} {value}(radians)")
    else:
        print(f"{name} {value}")
