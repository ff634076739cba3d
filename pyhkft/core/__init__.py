"""Core standard-state calculations for pyhkft."""

from .thermo import ThermoSystem, thermo
from .species import HKFTParameters, EOSParameterError, check_ghs
from .hkft import HKFT
from .standard_state import StandardState, standard_state
from .tables import hkft_props

__all__ = [
    'ThermoSystem', 'thermo',
    'HKFTParameters', 'EOSParameterError', 'check_ghs',
    'HKFT', 'StandardState', 'standard_state',
    'hkft_props'
]
