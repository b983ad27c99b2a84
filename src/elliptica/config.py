"""
Global Configuration for Elliptica Package
==========================================

This module provides package-wide configuration settings that users can modify
to control the default step behaviour, validation strictness, numerical
tolerances and default plotting options.

Examples
--------
View current configuration:

>>> import elliptica
>>> print(elliptica.config)

Modify settings:

>>> elliptica.config.STEP_SIZE = 0.05  # Larger canonical step per tick
>>> elliptica.config.STRICT_VALIDATION = True  # Degenerate geometry raises

Reset to defaults:

>>> elliptica.config.reset()

Temporarily modify settings:

>>> with elliptica.temp_config(STEP_RULE='ellipse'):
...     orbit = elliptica.Orbit(1.0, 3.0, 4.0, 10.0)

Notes
-----
Settings are read when an Orbit is constructed. Changing them never
alters an Orbit that already exists.
"""

from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class EllipticaConfig:
    """
    Global configuration for Elliptica package.
    
    Attributes
    ----------
    STEP_SIZE : float
        Canonical-frame x increment applied by every ``Orbit.tick()``.
        Default: 0.01
    STEP_RULE : str
        Step rule used when an Orbit is built without one.
        'reference' keeps the linear-in-x walk, 'ellipse' applies the
        square-root form of the ellipse equation.
        Default: 'reference'
    EQUALITY_RTOL : float
        Relative tolerance for floating-point equality comparisons.
        Default: 1e-12
    EQUALITY_ATOL : float
        Absolute tolerance for floating-point equality comparisons.
        Default: 1e-14
    STRICT_VALIDATION : bool
        If True, degenerate geometry raises InvalidOrbitGeometry.
        If False, it issues a DegenerateGeometryWarning and the orbit is
        built with a non-finite angle.
        Default: False
    DEFAULT_PLOT_POINTS : int
        Default number of ticks recorded when plotting straight from an Orbit.
        Default: 1000
    DEFAULT_FOCUS_COLOR : str
        Default color for the focus marker in plots.
        Default: 'orange'
    DEFAULT_TRACK_COLOR : str
        Default color for track lines in plots.
        Default: 'red'
    DEFAULT_TRACK_COLOR_ADD : str
        Default color for tracks added to an existing plot.
        Default: 'blue'
    """
    
    # Stepping
    STEP_SIZE: float = 0.01
    STEP_RULE: str = 'reference'

    # Numerical tolerance for equality comparisons
    EQUALITY_RTOL: float = 1e-12
    EQUALITY_ATOL: float = 1e-14
    
    # Validation behavior
    STRICT_VALIDATION: bool = False
    
    # Plotting defaults
    DEFAULT_PLOT_POINTS: int = 1000
    DEFAULT_FOCUS_COLOR: str = 'orange'
    DEFAULT_TRACK_COLOR: str = 'red'
    DEFAULT_TRACK_COLOR_ADD: str = 'blue'
    
    def reset(self):
        """
        Reset all configuration values to package defaults.
        
        Examples
        --------
        >>> import elliptica
        >>> elliptica.config.STEP_SIZE = 0.5  # Modify
        >>> elliptica.config.reset()  # Back to defaults
        >>> elliptica.config.STEP_SIZE
        0.01
        """
        defaults = EllipticaConfig()
        for key in self.__dataclass_fields__:
            setattr(self, key, getattr(defaults, key))
    
    def __repr__(self):
        """Return formatted string showing all configuration values."""
        lines = ["EllipticaConfig:"]
        lines.append("  Stepping:")
        lines.append(f"    STEP_SIZE = {self.STEP_SIZE}")
        lines.append(f"    STEP_RULE = '{self.STEP_RULE}'")
        lines.append("  Numerical Tolerances:")
        lines.append(f"    EQUALITY_RTOL = {self.EQUALITY_RTOL}")
        lines.append(f"    EQUALITY_ATOL = {self.EQUALITY_ATOL}")
        lines.append("  Behavior:")
        lines.append(f"    STRICT_VALIDATION = {self.STRICT_VALIDATION}")
        lines.append("  Plotting:")
        lines.append(f"    DEFAULT_PLOT_POINTS = {self.DEFAULT_PLOT_POINTS}")
        lines.append(f"    DEFAULT_FOCUS_COLOR = '{self.DEFAULT_FOCUS_COLOR}'")
        lines.append(f"    DEFAULT_TRACK_COLOR = '{self.DEFAULT_TRACK_COLOR}'")
        lines.append(f"    DEFAULT_TRACK_COLOR_ADD = '{self.DEFAULT_TRACK_COLOR_ADD}'")
        return "\n".join(lines)


# Global configuration instance
config = EllipticaConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Context manager for temporarily modifying configuration values.
    
    Configuration is automatically restored when the context exits,
    even if an exception occurs.
    
    Parameters
    ----------
    **kwargs
        Configuration attributes to temporarily modify.
    
    Examples
    --------
    >>> import elliptica
    >>> with elliptica.temp_config(STEP_SIZE=0.1, STRICT_VALIDATION=True):
    ...     orbit = elliptica.Orbit(1.0, 3.0, 4.0, 10.0)
    >>> # Original config restored here
    >>> elliptica.config.STEP_SIZE
    0.01
    
    Raises
    ------
    AttributeError
        If an invalid configuration attribute is specified.
    """
    for key in kwargs:
        if not hasattr(config, key):
            raise AttributeError(
                f"EllipticaConfig has no attribute '{key}'. "
                f"Valid attributes: {list(config.__dataclass_fields__.keys())}"
            )
    old_values = {key: getattr(config, key) for key in kwargs}
    for key, value in kwargs.items():
        setattr(config, key, value)
    
    try:
        yield config
    finally:
        for key, value in old_values.items():
            setattr(config, key, value)
