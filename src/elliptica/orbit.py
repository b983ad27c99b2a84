'''Elliptica: single-body elliptical orbit stepping
Orbit class definition'''

import copy
import numpy as np
from dataclasses import dataclass, astuple, fields
from enum import Enum
from typing import Callable, Optional, Tuple, TYPE_CHECKING
from . import geometry
from .config import config
from .utils import validation_error, DegenerateGeometryWarning

if TYPE_CHECKING:
    from .track import Track

# define an enumerated list of step rules
class StepRule(Enum):
    REFERENCE = 'reference'     # y = b*(a^2 - x^2)/a
    ELLIPSE = 'ellipse'         # y = +-b*sqrt(1 - (x/a)^2), x reverses at +-a


class InvalidOrbitGeometry(ValueError):
    """
    Initial conditions do not describe a closed orbit.

    Raised at construction when the starting point is at least as far from
    the focus as the semi-major axis (perihelion >= semi_major_axis), or when
    an input is not finite. No Orbit is created.

    Attributes
    ----------
    perihelion : float or None
        Perihelion distance computed from the initial offsets
    semi_major_axis : float or None
        Semi-major axis that was requested
    """
    def __init__(self, message, perihelion=None, semi_major_axis=None):
        super().__init__(message)
        self.perihelion = perihelion
        self.semi_major_axis = semi_major_axis


@dataclass(frozen=True)
class OrbitDiagnostics:
    """
    Values derived when an Orbit is constructed.

    Iterating yields ``(name, value)`` pairs in the order they are reported
    to an observer.
    """
    aphelion: float
    perihelion: float
    eccentricity: float
    semi_minor_axis: float
    angle: float

    def __iter__(self):
        for f in fields(self):
            yield f.name, getattr(self, f.name)

    def as_dict(self):
        return dict(self)

    def isclose(self, other: "OrbitDiagnostics") -> bool:
        """Compare with config.EQUALITY_RTOL/ATOL, NaN equal to NaN."""
        if not isinstance(other, OrbitDiagnostics):
            return False
        return bool(np.allclose(astuple(self), astuple(other),
                                rtol=config.EQUALITY_RTOL,
                                atol=config.EQUALITY_ATOL,
                                equal_nan=True))


Observer = Callable[[str, float], None]


class Orbit:
    """
    One body on an elliptical orbit around one fixed focus.

    All orbital parameters are derived once at construction from the body
    radius, the body's initial offset from the focus and the semi-major axis.
    Afterwards ``tick()`` advances the body by a fixed canonical-frame step
    and returns its position in the caller's frame. Only the canonical
    coordinates and the tick counter change after construction.

    Parameters
    ----------
    radius : float
        Body size, stored unchanged for the renderer
    initial_x, initial_y : float
        Initial position of the body relative to the focus
    semi_major_axis : float
        Half the longest diameter of the ellipse; must exceed the perihelion
    focus : array-like, optional
        (x, y) of the focus in the caller's frame (default (0, 0))
    step_size : float, optional
        Canonical x increment per tick (default config.STEP_SIZE)
    step_rule : StepRule or str, optional
        'reference' or 'ellipse' (default config.STEP_RULE)
    observer : callable, optional
        ``observer(name, value)`` called once per derived diagnostic value

    Raises
    ------
    InvalidOrbitGeometry
        If perihelion >= semi_major_axis, or an input is NaN/Inf

    Examples
    --------
    >>> orbit = Orbit(radius=1.0, initial_x=3.0, initial_y=4.0,
    ...               semi_major_axis=10.0)
    >>> orbit.eccentricity
    0.5
    >>> x, y = orbit.tick()
    """
    # ========== CONSTRUCTION ==========
    def __init__(self, radius, initial_x, initial_y, semi_major_axis, *,
                 focus=(0.0, 0.0), step_size=None, step_rule=None,
                 observer: Optional[Observer] = None):
        # nothing is stored until every check has passed
        perihelion = self.validate(initial_x, initial_y, semi_major_axis)

        focus = np.array(focus, dtype=float)
        if focus.shape != (2,):
            raise ValueError(f"Focus must be an (x, y) pair, got shape {focus.shape}")
        if not np.all(np.isfinite(focus)):
            raise ValueError("Focus contains NaN or Inf")

        if step_size is None:
            step_size = config.STEP_SIZE
        step_size = float(step_size)
        if not np.isfinite(step_size) or step_size <= 0:
            raise ValueError(f"Step size must be positive, got {step_size}")

        if step_rule is None:
            step_rule = config.STEP_RULE
        step_rule = self._parse_step_rule(step_rule)

        # derived parameters, in dependency order
        semi_major_axis = np.float64(semi_major_axis)
        aphelion = geometry.aphelion(perihelion, semi_major_axis)
        eccentricity = geometry.eccentricity(perihelion, aphelion)
        semi_minor_axis = geometry.semi_minor_axis(semi_major_axis, eccentricity)
        angle = geometry.orientation_angle(initial_x, initial_y)

        if geometry.is_degenerate_triangle(initial_x, initial_y):
            validation_error(
                f"Initial offset ({initial_x}, {initial_y}) does not form a "
                f"triangle with the major axis; orbit angle is {angle}",
                InvalidOrbitGeometry, DegenerateGeometryWarning)

        self._radius = radius
        self._initial = (float(initial_x), float(initial_y))
        self._semi_major_axis = float(semi_major_axis)
        self._perihelion = float(perihelion)
        self._aphelion = float(aphelion)
        self._eccentricity = float(eccentricity)
        self._semi_minor_axis = float(semi_minor_axis)
        self._angle = float(angle)
        self._focus = focus
        self._focus.flags.writeable = False
        self._step_size = step_size
        self._step_rule = step_rule

        # the only mutable state
        self._standard_coords = (self._semi_major_axis, 0.0)
        self._ticks = 0
        self._direction = -1

        if observer is not None:
            for name, value in self.diagnostics:
                observer(name, value)

    # ========== VALIDATION ==========
    @staticmethod
    def validate(initial_x, initial_y, semi_major_axis) -> float:
        """
        Check that the initial conditions describe a closed orbit.

        Returns
        -------
        float
            Perihelion distance, for reuse by the derivation

        Raises
        ------
        InvalidOrbitGeometry
            If perihelion >= semi_major_axis or an input is NaN/Inf
        """
        if not np.all(np.isfinite([initial_x, initial_y, semi_major_axis])):
            raise InvalidOrbitGeometry(
                f"Orbit inputs must be finite, got initial_x={initial_x}, "
                f"initial_y={initial_y}, semi_major_axis={semi_major_axis}",
                semi_major_axis=semi_major_axis)
        perihelion = geometry.perihelion(initial_x, initial_y)
        if perihelion >= semi_major_axis:
            raise InvalidOrbitGeometry(
                f"Perihelion ({perihelion}) cannot be larger than the "
                f"semi major axis ({semi_major_axis})",
                perihelion=float(perihelion), semi_major_axis=semi_major_axis)
        return perihelion

    # ========== PROPERTY ACCESS ==========
    @property
    def radius(self):
        """Body size, as given at construction"""
        return self._radius

    @property
    def initial_x(self) -> float:
        return self._initial[0]

    @property
    def initial_y(self) -> float:
        return self._initial[1]

    @property
    def semi_major_axis(self) -> float:
        return self._semi_major_axis

    @property
    def semi_minor_axis(self) -> float:
        return self._semi_minor_axis

    @property
    def eccentricity(self) -> float:
        """Eccentricity in [0, 1)"""
        return self._eccentricity

    @property
    def perihelion(self) -> float:
        """Closest distance to the focus"""
        return self._perihelion

    @property
    def aphelion(self) -> float:
        """Farthest distance from the focus"""
        return self._aphelion

    @property
    def angle(self) -> float:
        """Orientation of the major axis [rad] (NaN for degenerate input)"""
        return self._angle

    @property
    def focus(self) -> Tuple[float, float]:
        """Focus position in the caller's frame"""
        return (float(self._focus[0]), float(self._focus[1]))

    @property
    def step_size(self) -> float:
        return self._step_size

    @property
    def step_rule(self) -> StepRule:
        return self._step_rule

    @property
    def standard_coords(self) -> Tuple[float, float]:
        """Current position in the unrotated, focus-at-origin frame"""
        return self._standard_coords

    @property
    def ticks(self) -> int:
        """Number of ticks since construction or the last reset()"""
        return self._ticks

    @property
    def position(self) -> Tuple[float, float]:
        """Current position in the caller's frame, without advancing"""
        return self.transform(self._standard_coords)

    @property
    def diagnostics(self) -> OrbitDiagnostics:
        return OrbitDiagnostics(
            aphelion=self._aphelion,
            perihelion=self._perihelion,
            eccentricity=self._eccentricity,
            semi_minor_axis=self._semi_minor_axis,
            angle=self._angle,
        )

    # ========== STEPPING ==========
    def tick(self) -> Tuple[float, float]:
        """
        Advance the body one step and return its position.

        With the reference rule the canonical x grows by ``step_size`` and y is
        b*(a^2 - x^2)/a, which turns negative as soon as x passes a. With the
        ellipse rule x moves back and forth between the vertices and y stays on
        the ellipse. The new canonical point is then rotated by ``angle`` and
        translated to ``focus``.

        Returns
        -------
        tuple of float
            (x, y) in the caller's frame
        """
        if self._step_rule == StepRule.REFERENCE:
            next_x = self._standard_coords[0] + self._step_size
            next_y = geometry.reference_step_y(
                next_x, self._semi_major_axis, self._semi_minor_axis)
        else:
            next_x, next_y, self._direction = geometry.ellipse_step(
                self._standard_coords[0], self._direction, self._step_size,
                self._semi_major_axis, self._semi_minor_axis)

        self._standard_coords = (float(next_x), float(next_y))
        self._ticks += 1
        return self.transform(self._standard_coords)

    def transform(self, coords) -> Tuple[float, float]:
        """Rotate canonical (x, y) by the orbit angle and translate to the focus."""
        x, y = geometry.rotate_translate(coords, self._angle, self._focus)
        return (float(x), float(y))

    def run(self, n_ticks: int) -> "Track":
        """
        Tick ``n_ticks`` times and record every position.

        Parameters
        ----------
        n_ticks : int
            Number of ticks (at least 1)

        Returns
        -------
        Track
            Positions and canonical coordinates of each tick
        """
        from .track import Track
        n_ticks = int(n_ticks)
        if n_ticks < 1:
            raise ValueError(f"n_ticks must be at least 1, got {n_ticks}")

        standard = np.empty((n_ticks, 2))
        numbers = np.empty(n_ticks, dtype=int)
        for k in range(n_ticks):
            self.tick()
            standard[k] = self._standard_coords
            numbers[k] = self._ticks
        positions = geometry.rotate_translate(standard, self._angle, self._focus)
        return Track(positions, standard, numbers, focus=self.focus)

    def preview(self, n_ticks: Optional[int] = None) -> "Track":
        """Track of the next n_ticks (default config.DEFAULT_PLOT_POINTS), leaving this orbit untouched"""
        if n_ticks is None:
            n_ticks = config.DEFAULT_PLOT_POINTS
        return self.copy().run(n_ticks)

    # ========== UTILITY METHODS ==========
    def reset(self):
        """Return the body to its starting canonical point (a, 0)."""
        self._standard_coords = (self._semi_major_axis, 0.0)
        self._ticks = 0
        self._direction = -1

    def copy(self) -> "Orbit":
        """Independent Orbit with the same parameters and current state"""
        return copy.copy(self)

    def info(self):
        """Print a summary of the orbit parameters"""
        print(f"Orbit (radius = {self._radius})")
        print(f"  Semi-major axis = {self._semi_major_axis:.6f}")
        print(f"  Semi-minor axis = {self._semi_minor_axis:.6f}")
        print(f"  Eccentricity    = {self._eccentricity:.6f}")
        print(f"  Perihelion      = {self._perihelion:.6f}")
        print(f"  Aphelion        = {self._aphelion:.6f}")
        print(f"  Angle           = {self._angle:.6f} rad "
              f"({np.degrees(self._angle):.4f}°)")
        print(f"  Focus           = ({self._focus[0]}, {self._focus[1]})")
        print(f"\nStepping: {self._step_rule.value} rule, "
              f"step size {self._step_size}")
        print(f"  Tick {self._ticks}, canonical coords = "
              f"({self._standard_coords[0]:.6f}, {self._standard_coords[1]:.6f})")

    # ========== SPECIAL METHODS ==========
    def __repr__(self):
        return (f"Orbit(radius={self._radius!r}, initial_x={self._initial[0]!r}, "
                f"initial_y={self._initial[1]!r}, "
                f"semi_major_axis={self._semi_major_axis!r})")

    def __str__(self):
        return (f"Elliptical Orbit:\n"
                f"  a     = {self._semi_major_axis:12.6f}\n"
                f"  b     = {self._semi_minor_axis:12.6f}\n"
                f"  e     = {self._eccentricity:12.6f}\n"
                f"  angle = {np.degrees(self._angle):12.4f}°\n"
                f"  tick  = {self._ticks:12d}")

    # ========== STATIC METHODS ==========
    @staticmethod
    def _parse_step_rule(step_rule):
        """Convert string or enum to StepRule enum"""
        if isinstance(step_rule, StepRule):
            return step_rule
        elif isinstance(step_rule, str):
            rule_map = {
                'reference': StepRule.REFERENCE,
                'ref': StepRule.REFERENCE,
                'ellipse': StepRule.ELLIPSE,
                'elliptic': StepRule.ELLIPSE,
            }
            if step_rule in rule_map:
                return rule_map[step_rule]
            else:
                raise ValueError(f"Unknown step rule '{step_rule}'. "
                                 f"Use: {list(rule_map.keys())}")
        else:
            raise TypeError(f"step_rule must be StepRule or str, "
                            f"got {type(step_rule)}")
