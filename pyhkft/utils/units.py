"""
Unit conversions for aqueous thermodynamics.

convert() goes from the working units of the equations of state (K, cal,
bar, cm3) to other units, and back; outvert() puts energies into the units
chosen with thermo() option 'E.units'. After CHNOSZ util.units.R.
"""

import warnings
import numpy as np
from typing import Union, List

from ..core.thermo import thermo

# target units -> (multiply, divide, add)
_CONVERSIONS = {
    # temperature
    'k': (1, 1, 273.15),       # from C
    'c': (1, 1, -273.15),      # from K
    # energy
    'j': (4.184, 1, 0),        # from cal
    'cal': (1, 4.184, 0),      # from J
    # volume, with 1 J bar-1 = 10 cm3
    'cm3bar': (10, 1, 0),      # from J bar-1
    'joules': (1, 10, 0),      # from cm3 bar
    # pressure
    'mpa': (1, 10, 0),         # from bar
    'bar': (10, 1, 0),         # from MPa
    'pa': (1e5, 1, 0),         # from bar
}


def convert(value: Union[float, np.ndarray, List[float]],
            units: str) -> Union[float, np.ndarray]:
    """
    Convert values to the given units.

    Parameters
    ----------
    value : float, ndarray, or list
        Values in the source units (C or K, cal or J, bar or MPa, J bar-1 or cm3 bar)
    units : str
        Target units: 'K', 'C', 'J', 'cal', 'cm3bar', 'joules', 'MPa', 'bar', 'Pa'

    Returns
    -------
    float or ndarray

    Examples
    --------
    >>> float(convert(1, 'J'))
    4.184
    >>> float(convert(1.01325, 'Pa'))
    101325.0
    """
    if value is None:
        return None
    value = np.asarray(value, dtype=float)
    factors = _CONVERSIONS.get(units.lower())
    if factors is None:
        warnings.warn(f"convert: no conversion to {units} found")
        return value
    multiply, divide, add = factors
    return value * multiply / divide + add


def outvert(value: Union[float, np.ndarray, List[float]],
            units: str) -> Union[float, np.ndarray]:
    """
    Convert energies from the given units ('J' or 'cal') to those of option 'E.units'.
    """
    E_units = thermo().get_option('E.units')
    if units.lower() == E_units.lower():
        return np.asarray(value, dtype=float)
    return convert(value, E_units)
