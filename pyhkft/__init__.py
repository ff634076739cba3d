"""
pyhkft: Standard-state properties of aqueous species from the revised
Helgeson-Kirkham-Flowers (HKF) equations of state.

An evaluator holds the parameters of one aqueous species and calculates its
standard partial molal Gibbs energy, enthalpy, entropy, internal energy, heat
capacities and volume at temperature and pressure, using the properties of
liquid water from a solvent provider that may be shared between species.
"""

__version__ = "0.1.0"

# Import main classes and functions
from .core.thermo import ThermoSystem, thermo
from .core.species import (HKFTParameters, EOSParameterError, check_ghs,
                           formation_to_absolute, absolute_to_formation)
from .core.hkft import HKFT
from .core.standard_state import StandardState, standard_state
from .core.tables import hkft_props
from .models.water import water, WaterIF97, WaterState, WaterModelError

# Import correlation functions
from .models.hkf import gfun, ffun, gstar, ag, bg, born_omega

from .utils.formula import makeup, mass, entropy, FormulaError
from .utils.units import convert

__all__ = [
    'ThermoSystem',
    'thermo',
    'HKFTParameters',
    'EOSParameterError',
    'check_ghs',
    'formation_to_absolute',
    'absolute_to_formation',
    'HKFT',
    'StandardState',
    'standard_state',
    'hkft_props',
    'water',
    'WaterIF97',
    'WaterState',
    'WaterModelError',
    'gfun',
    'ffun',
    'gstar',
    'ag',
    'bg',
    'born_omega',
    'makeup',
    'mass',
    'entropy',
    'FormulaError',
    'convert',
]
