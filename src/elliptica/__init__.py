"""
Elliptica: Single-Body Elliptical Orbit Stepping

A Python package that derives the shape and orientation of one elliptical
orbit from a handful of initial conditions and walks the orbiting body along
it one fixed step at a time, for hosts that draw a frame per step.
"""

# Core classes
from .orbit import Orbit, OrbitDiagnostics, StepRule, InvalidOrbitGeometry
from .track import Track

# Configuration
from .config import config, temp_config

# Warnings and observers
from .utils import DegenerateGeometryWarning, print_observer

# Package metadata
__version__ = "0.1.0"

# Define what gets imported with "from elliptica import *"
__all__ = [
    # Classes
    "Orbit",
    "OrbitDiagnostics",
    "StepRule",
    "Track",
    # Errors and warnings
    "InvalidOrbitGeometry",
    "DegenerateGeometryWarning",
    # Configuration
    "config",
    "temp_config",
    # Observers
    "print_observer",
]
