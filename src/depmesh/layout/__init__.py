"""
Layout solvers.

One integrator (Simulation) runs one of two force configurations:
omnidirectional for dependency views, layered for process diagrams.
"""

from .modes import FORCE, LAYERED, ForceConfiguration, configuration_for
from .simulation import Simulation

__all__ = [
    "Simulation",
    "ForceConfiguration",
    "FORCE",
    "LAYERED",
    "configuration_for",
]
