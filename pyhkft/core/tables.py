"""
Tables of standard-state properties over ranges of temperature and pressure.
"""

import numpy as np
import pandas as pd
from typing import Union, List, Optional

from .standard_state import standard_state
from ..models.water import WaterIF97
from ..utils.units import convert

# property name -> accessor
PROPERTIES = {
    "G": "gibbs_mole",
    "H": "enthalpy_mole",
    "S": "entropy_mole",
    "U": "int_energy_mole",
    "Cp": "cp_mole",
    "Cv": "cv_mole",
    "V": "molar_volume",
    "E": "expansivity",
    "kT": "compressibility",
    "density": "density",
}


def hkft_props(species, property: Optional[Union[str, List[str]]] = None,
               T: Union[float, List[float], np.ndarray] = 298.15,
               P: Union[float, List[float], np.ndarray, str] = "Psat",
               water=None) -> pd.DataFrame:
    """
    Calculate standard-state properties of one species at several T and P.

    Parameters
    ----------
    species : HKFTParameters, dict or pandas Series
        Species parameters or OBIGT-style record
    property : str or list of str, optional
        Properties to calculate (G, H, S, U, Cp, Cv, V, E, kT, density).
        Default is G, H, S, Cp, V.
    T : float or array-like
        Temperature (K)
    P : float, array-like or "Psat"
        Pressure (bar), or "Psat" for the saturation pressure with a floor of 1 atm
    water : solvent provider, optional

    Returns
    -------
    pandas.DataFrame
        Columns T (K), P (bar), rho (density of water, kg m-3) and the
        properties. Energies are in the units of option 'E.units';
        V in cm3 mol-1, E in cm3 mol-1 K-1, kT in cm3 mol-1 bar-1.

    Examples
    --------
    >>> from pyhkft import hkft_props
    >>> df = hkft_props(na, T=[298.15, 373.15, 473.15])
    """
    if property is None:
        property = ["G", "H", "S", "Cp", "V"]
    elif isinstance(property, str):
        property = [property]
    for prop in property:
        if prop not in PROPERTIES:
            raise ValueError(f"unknown property {prop}; available: {', '.join(PROPERTIES)}")

    if water is None:
        water = WaterIF97()
    T = np.atleast_1d(np.asarray(T, dtype=float))
    if isinstance(P, str):
        if P.lower() != "psat":
            raise ValueError(f"P must be numeric or 'Psat', got {P!r}")
        P = np.array([water.pref_safe(t) for t in T]) / 1e5
    P = np.atleast_1d(np.asarray(P, dtype=float))
    T, P = np.broadcast_arrays(T, P)

    ss = standard_state(species, water=water, T=T[0], P=convert(P[0], 'Pa'))
    rows = []
    for t, p in zip(T, P):
        ss.set_state_TP(t, float(convert(p, 'Pa')))
        row = {"T": t, "P": p, "rho": ss.water_state.rho}
        for prop in property:
            row[prop] = getattr(ss, PROPERTIES[prop])()
        rows.append(row)

    out = pd.DataFrame(rows)
    # volumes in cm3 mol-1
    for prop, factor in [("V", 1e6), ("E", 1e6), ("kT", 1e6 * 1e5)]:
        if prop in out:
            out[prop] = out[prop] * factor
    return out
