'''Elliptica: planar orbit geometry helpers
Pure functions shared by the Orbit model. Every function takes and returns
numpy float64 scalars so that degenerate inputs produce NaN/Inf instead of
raising ZeroDivisionError.'''

import numpy as np


def pythagorean(a, b):
    """Length of the hypotenuse for legs a and b, sqrt(a^2 + b^2)."""
    a = np.float64(a)
    b = np.float64(b)
    return np.sqrt(a**2 + b**2)


def perihelion(initial_x, initial_y):
    """
    Closest approach distance of the orbit to its focus.
    
    The initial coordinates are offsets from the focus. A body starting on
    the major axis (y == 0) is |x| away; otherwise the distance is the
    Euclidean norm of the offset.
    
    Parameters
    ----------
    initial_x, initial_y : float
        Initial position relative to the focus
    
    Returns
    -------
    np.float64
        Perihelion distance (non-negative, NaN if an input is NaN)
    """
    if initial_y == 0:
        return np.abs(np.float64(initial_x))
    return pythagorean(np.abs(initial_y), np.abs(initial_x))


def aphelion(perihelion_dist, semi_major_axis):
    """Farthest distance from the focus, using perihelion + aphelion = 2a."""
    return np.float64(semi_major_axis) * 2.0 - np.float64(perihelion_dist)


def eccentricity(perihelion_dist, aphelion_dist):
    """Eccentricity from the apsis distances, (r_a - r_p)/(r_a + r_p)."""
    r_p = np.float64(perihelion_dist)
    r_a = np.float64(aphelion_dist)
    with np.errstate(divide='ignore', invalid='ignore'):
        return (r_a - r_p) / (r_a + r_p)


def semi_minor_axis(semi_major_axis, ecc):
    """Semi-minor axis b = a*sqrt(1 - e^2)."""
    ecc = np.float64(ecc)
    with np.errstate(invalid='ignore'):
        return np.float64(semi_major_axis) * np.sqrt(1.0 - ecc**2)


def orientation_angle(initial_x, initial_y):
    """
    Orientation of the major axis relative to the initial position [rad].
    
    Solves the right triangle with legs |x| and |y| for the angle opposite
    the |x| side using the law of cosines (SSS).
    
    Parameters
    ----------
    initial_x, initial_y : float
        Initial position relative to the focus
    
    Returns
    -------
    np.float64
        Angle in [0, pi/2]. NaN when the triangle is degenerate
        (y == 0, which includes x == y == 0).
    
    Notes
    -----
    The cosine argument is clipped to [-1, 1] so that rounding in the
    hypotenuse cannot push a valid triangle outside the arccos domain.
    NaN passes through the clip unchanged.
    """
    side_a = np.abs(np.float64(initial_x))
    side_c = np.abs(np.float64(initial_y))
    side_b = pythagorean(side_a, side_c)
    with np.errstate(divide='ignore', invalid='ignore'):
        cos_angle = (side_b**2 + side_c**2 - side_a**2) / (2.0 * side_b * side_c)
    return np.arccos(np.clip(cos_angle, -1.0, 1.0))


def is_degenerate_triangle(initial_x, initial_y):
    """True if the orientation triangle has a zero-length side b or c."""
    side_c = np.abs(np.float64(initial_y))
    side_b = pythagorean(initial_x, initial_y)
    return bool(side_b == 0 or side_c == 0)


# ========== STEP RULES ==========
def reference_step_y(next_x, semi_major_axis, semi_minor_axis):
    """
    Canonical-frame y for the linear-in-x walk, b*(a^2 - x^2)/a.
    
    This is not the ellipse equation: there is no square root, and past
    x = a the bracket goes negative so y flips sign.
    """
    a = np.float64(semi_major_axis)
    x = np.float64(next_x)
    return (np.float64(semi_minor_axis) * (a**2 - x**2)) / a


def ellipse_step_y(next_x, semi_major_axis, semi_minor_axis):
    """
    Canonical-frame y on the upper half of the ellipse, b*sqrt(1 - (x/a)^2).
    
    Returns NaN for |x| > a.
    """
    a = np.float64(semi_major_axis)
    x = np.float64(next_x)
    with np.errstate(invalid='ignore'):
        return np.float64(semi_minor_axis) * np.sqrt(1.0 - (x / a)**2)


def ellipse_step(x, direction, step_size, semi_major_axis, semi_minor_axis):
    """
    One step of a closed walk around the ellipse, x moving back and forth.
    
    The body travels toward -a on the upper half (direction -1) and back
    toward +a on the lower half (direction +1), reversing at the vertices.
    
    Parameters
    ----------
    x : float
        Current canonical x, within [-a, a]
    direction : int
        -1 or +1, current direction of travel along x
    step_size : float
        Positive x increment
    semi_major_axis, semi_minor_axis : float
        Ellipse axes
    
    Returns
    -------
    tuple
        (next_x, next_y, next_direction)
    """
    a = float(semi_major_axis)
    next_x = x + direction * step_size
    while abs(next_x) > a:
        if next_x > a:
            next_x = 2.0 * a - next_x
            direction = -1
        else:
            next_x = -2.0 * a - next_x
            direction = 1
    next_y = -direction * ellipse_step_y(next_x, a, semi_minor_axis)
    return next_x, next_y, direction


# ========== FRAME TRANSFORMS ==========
def rotation_matrix(angle):
    """2x2 counter-clockwise rotation matrix for angle [rad]."""
    c = np.cos(angle)
    s = np.sin(angle)
    return np.array([
        [c, -s],
        [s,  c]
    ])


def rotate_translate(coords, angle, offset):
    """
    Rotate 2D coords about the origin by angle, then translate by offset.
    
    Parameters
    ----------
    coords : array-like
        (x, y) point, or (n, 2) array of points
    angle : float
        Counter-clockwise rotation [rad]
    offset : array-like
        (x, y) translation applied after rotation
    
    Returns
    -------
    np.ndarray
        Transformed point(s), same shape as coords
    """
    coords = np.asarray(coords, dtype=float)
    R = rotation_matrix(angle)
    return coords @ R.T + np.asarray(offset, dtype=float)
