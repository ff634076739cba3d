"""
Species parameters for the revised HKF equations of state.

HKFTParameters holds the coefficients of one aqueous species and its
reference-state properties. Formation properties (G, H, S) at 298.15 K and
1 atm are converted to the absolute chemical potential mu0 using the
entropies of the elements (Benson-Helgeson convention, with the charge
counted as -1/2 H2).
"""

import math
import warnings
import numpy as np
import pandas as pd
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Union

from .thermo import thermo
from ..models.hkf import Tr, Pr, omega_from_radius, radius_from_omega
from ..utils.formula import entropy, calculate_ghs


class EOSParameterError(Exception):
    """Exception raised for missing or invalid equation-of-state parameters."""
    pass


REQUIRED_COEFFICIENTS = ['a1', 'a2', 'a3', 'a4', 'c1', 'c2', 'z']

# OBIGT column names and scaling factors (CHNOSZ OBIGT2eos)
OBIGT_COLUMNS = ['a1.a', 'a2.b', 'a3.c', 'a4.d', 'c1.e', 'c2.f', 'omega.lambda', 'z.T']
EOS_COLUMNS = ['a1', 'a2', 'a3', 'a4', 'c1', 'c2', 'omega', 'z']
SCALING_FACTORS = [0.1, 100, 1, 10000, 1, 10000, 100000, 1]


def _missing(value) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def element_entropy(formula: str) -> float:
    """Entropy (cal K-1 mol-1) of the elements in a formula, including charge."""
    return entropy(formula) / 4.184


def formation_to_absolute(G: float, H: float, S: float, formula: str) -> Dict[str, float]:
    """
    Convert formation properties at Tr, Pr to the absolute chemical potential.

    mu0 = G - Tr * Se, where Se is the entropy of the elements.

    Parameters
    ----------
    G : float
        Standard Gibbs energy of formation (cal mol-1)
    H : float
        Standard enthalpy of formation (cal mol-1), carried unchanged
    S : float
        Standard third-law entropy (cal K-1 mol-1), carried unchanged
    formula : str
        Chemical formula, with charge

    Returns
    -------
    dict
        mu0, H, S
    """
    Se = element_entropy(formula)
    return {"mu0": G - Tr * Se, "H": H, "S": S}


def absolute_to_formation(mu0: float, H: Optional[float], S: float, formula: str) -> Dict[str, float]:
    """
    Convert the absolute chemical potential at Tr, Pr back to formation properties.

    If H is not given, it is calculated from G and S.

    Returns
    -------
    dict
        G, H, S
    """
    Se = element_entropy(formula)
    G = mu0 + Tr * Se
    if _missing(H):
        H = G + Tr * (S - Se)
    return {"G": G, "H": H, "S": S}


@dataclass(frozen=True)
class HKFTParameters:
    """
    Coefficients of the revised HKF equations of state for one aqueous species.

    Units are those of SUPCRT92 without the OBIGT scale factors:
    a1 (cal mol-1 bar-1), a2 (cal mol-1), a3 (cal K mol-1 bar-1),
    a4 (cal K mol-1), c1 (cal mol-1 K-1), c2 (cal K mol-1), omega (cal mol-1),
    radius (Angstrom), G and H (cal mol-1), S (cal mol-1 K-1).

    The reference state is given either as formation properties (at least
    two of G, H, S) or as the absolute chemical potential mu0 with S.
    Either omega or radius must be given for charged species.
    """
    name: str
    formula: str
    a1: float
    a2: float
    a3: float
    a4: float
    c1: float
    c2: float
    z: float
    omega: Optional[float] = None
    radius: Optional[float] = None
    G: Optional[float] = None
    H: Optional[float] = None
    S: Optional[float] = None
    mu0: Optional[float] = None
    model: str = "HKF"
    state: str = "aq"
    Tr: float = Tr
    Pr: float = Pr
    source: str = field(default="formation", init=False)

    def __post_init__(self):
        for name in REQUIRED_COEFFICIENTS:
            value = getattr(self, name)
            if _missing(value):
                raise EOSParameterError(f"{self.name}: missing HKF parameter {name}")
            if not np.isfinite(value):
                raise EOSParameterError(f"{self.name}: HKF parameter {name} is not finite")
        if self.state != "aq":
            raise EOSParameterError(f"{self.name}: HKF parameters apply to aqueous species, not '{self.state}'")
        if self.Tr != Tr or self.Pr != Pr:
            raise EOSParameterError(
                f"{self.name}: reference state must be Tr = {Tr} K and Pr = {Pr} bar "
                f"(got {self.Tr} K and {self.Pr} bar)")
        if _missing(self.formula) or not str(self.formula):
            raise EOSParameterError(f"{self.name}: chemical formula is required")

        self._set_born_coefficient()
        self._set_reference_state()

    def _set_born_coefficient(self):
        z = self.z
        omega, radius = self.omega, self.radius
        if z == 0:
            # neutral species: omega is used as given
            if _missing(omega):
                raise EOSParameterError(f"{self.name}: missing HKF parameter omega")
            return
        if _missing(omega) and _missing(radius):
            raise EOSParameterError(f"{self.name}: either omega or radius must be given for a charged species")
        if _missing(omega):
            if radius <= 0:
                raise EOSParameterError(f"{self.name}: electrostatic radius must be positive")
            object.__setattr__(self, "omega", omega_from_radius(radius, z))
            return
        radius_calc = radius_from_omega(omega, z)
        if not _missing(radius):
            omega_calc = omega_from_radius(radius, z)
            tol = thermo().get_option('omega.tol', 1e-3)
            if abs(omega_calc - omega) > tol * max(abs(omega), 1.0):
                warnings.warn(f"{self.name}: omega calculated from radius ({omega_calc:.1f}) "
                              f"differs from given omega ({omega:.1f}); using given omega")
        object.__setattr__(self, "radius", radius_calc)

    def _set_reference_state(self):
        G, H, S, mu0 = self.G, self.H, self.S, self.mu0
        if not _missing(mu0):
            if not _missing(G):
                raise EOSParameterError(f"{self.name}: give either G of formation or mu0, not both")
            if _missing(S):
                raise EOSParameterError(f"{self.name}: S is required with mu0")
            ghs = absolute_to_formation(mu0, H, S, self.formula)
            object.__setattr__(self, "G", ghs["G"])
            object.__setattr__(self, "H", ghs["H"])
            object.__setattr__(self, "source", "absolute")
            return

        n_missing = sum(_missing(x) for x in (G, H, S))
        if n_missing > 1:
            raise EOSParameterError(
                f"{self.name}: reference state needs mu0 and S, or at least two of G, H, S")
        if n_missing == 1:
            ghs = calculate_ghs(self.formula, G=np.nan if _missing(G) else G,
                                H=np.nan if _missing(H) else H,
                                S=np.nan if _missing(S) else S, T=Tr, E_units="cal")
            G, H, S = ghs["G"], ghs["H"], ghs["S"]
            object.__setattr__(self, "G", G)
            object.__setattr__(self, "H", H)
            object.__setattr__(self, "S", S)
        else:
            check_ghs(self.name, self.formula, G, H, S)
        object.__setattr__(self, "mu0", formation_to_absolute(G, H, S, self.formula)["mu0"])

    def formation(self) -> Dict[str, float]:
        """Formation properties G, H, S at Tr, Pr (cal)."""
        return absolute_to_formation(self.mu0, self.H, self.S, self.formula)

    @classmethod
    def from_obigt(cls, row: Union[Dict[str, Any], pd.Series]) -> "HKFTParameters":
        """
        Build parameters from an OBIGT-style record.

        The OBIGT scale factors are removed and values in J are converted to cal.

        Parameters
        ----------
        row : dict or pandas Series
            Record with OBIGT column names (name, formula, state, E_units,
            G, H, S, a1.a, a2.b, a3.c, a4.d, c1.e, c2.f, omega.lambda, z.T,
            model)
        """
        if isinstance(row, pd.Series):
            row = row.to_dict()
        name = row.get('name', row.get('formula'))
        model = row.get('model', 'HKF')
        if _missing(model):
            model = 'HKF'
        if model != 'HKF':
            raise EOSParameterError(f"{name}: model {model} is not HKF")

        E_units = row.get('E_units', 'cal')
        if E_units not in ('J', 'cal'):
            raise EOSParameterError(f"{name}: unrecognized energy units {E_units}")
        Jcal = 4.184 if E_units == 'J' else 1.0

        values = {}
        for csv_col, eos_col, factor in zip(OBIGT_COLUMNS, EOS_COLUMNS, SCALING_FACTORS):
            value = row.get(csv_col)
            if _missing(value):
                values[eos_col] = None
            elif eos_col == 'z':
                values[eos_col] = float(value)
            else:
                values[eos_col] = float(value) * factor / Jcal

        ref = {}
        for col in ['G', 'H', 'S']:
            value = row.get(col)
            ref[col] = None if _missing(value) else float(value) / Jcal

        return cls(name=name, formula=row.get('formula'), state=row.get('state', 'aq'),
                   model=model, G=ref['G'], H=ref['H'], S=ref['S'], **values)


def check_ghs(name: str, formula: str, G: float, H: float, S: float) -> float:
    """
    Check the consistency of G, H and S of formation.

    Warns if H differs from G + Tr * (S - Se) by more than the option G.tol
    (cal mol-1). Returns the difference.
    """
    Se = element_entropy(formula)
    H_calc = G + Tr * (S - Se)
    diff = H_calc - H
    tol = thermo().get_option('G.tol', 100)
    if abs(diff) > tol:
        warnings.warn(f"{name}: G, H and S of formation are inconsistent; "
                      f"calculated H differs by {diff:.0f} cal mol-1 (G.tol = {tol})")
    return diff
