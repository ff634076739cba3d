"""Water property models and HKF correlation functions for pyhkft."""

from .water import water, WaterIF97, WaterState, WaterModelError

# Import HKF correlation functions
from .hkf import gfun, ffun, gstar, ag, bg, born_omega, convert_cm3bar

__all__ = [
    'water', 'WaterIF97', 'WaterState', 'WaterModelError',
    'gfun', 'ffun', 'gstar', 'ag', 'bg', 'born_omega', 'convert_cm3bar'
]
