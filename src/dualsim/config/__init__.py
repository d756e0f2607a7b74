"""
Configuration layer for dualsim.

Configuration is explicit: a SimulationConfig is passed into the
matcher or refiner, never read from global state during a match.
load_config() is the only place the environment is consulted.
"""

from dualsim.config.constants import DEFAULTS
from dualsim.config.settings import SimulationConfig, load_config

__all__ = [
    "DEFAULTS",
    "SimulationConfig",
    "load_config",
]
