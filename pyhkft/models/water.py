"""
Water properties for the HKF equations of state.

This module provides the solvent state provider used by the standard-state
evaluators: density of liquid water from IAPWS-IF97 Region 1 and the
dielectric constant from Johnson & Norton (1991), with first and second
derivatives in temperature and pressure and the Born functions built from
them.

- WaterState: immutable snapshot of solvent properties at one (T, P)
- WaterIF97: provider that holds the current (T, P) state
- water(): calculate properties of H2O over arrays of T and P
"""

import copy
import numpy as np
from dataclasses import dataclass, fields
from typing import Union, List, Optional, Dict, Any

from .iapws_if97 import region1_volume, psat_if97, T_CRIT, P_CRIT, RHO_CRIT
from .dielectric import epsilon_JN91


class WaterModelError(Exception):
    """Exception raised for water model calculation errors."""
    pass


@dataclass(frozen=True)
class WaterState:
    """
    Properties of liquid water at one temperature and pressure.

    Temperatures are in K, pressures in bar, density in kg/m3.
    Derivatives are per K and per bar.
    """
    T: float
    P: float
    rho: float
    drhodT: float
    d2rhodT2: float
    drhodP: float
    d2rhodP2: float
    d2rhodTdP: float
    epsilon: float
    dedT: float
    d2edT2: float
    dedP: float
    d2edP2: float
    d2edTdP: float

    @property
    def alpha(self) -> float:
        """Coefficient of isobaric expansivity (K-1)."""
        return -self.drhodT / self.rho

    @property
    def daldT(self) -> float:
        """Temperature derivative of the isobaric expansivity (K-2)."""
        return -self.d2rhodT2 / self.rho + (self.drhodT / self.rho) ** 2

    @property
    def beta(self) -> float:
        """Coefficient of isothermal compressibility (bar-1)."""
        return self.drhodP / self.rho

    # Born functions
    @property
    def ZBorn(self) -> float:
        return -1 / self.epsilon

    @property
    def YBorn(self) -> float:
        return self.dedT / self.epsilon ** 2

    @property
    def XBorn(self) -> float:
        return self.d2edT2 / self.epsilon ** 2 - 2 * self.epsilon * self.YBorn ** 2

    @property
    def QBorn(self) -> float:
        return self.dedP / self.epsilon ** 2

    @property
    def NBorn(self) -> float:
        return self.d2edP2 / self.epsilon ** 2 - 2 * self.epsilon * self.QBorn ** 2

    @property
    def UBorn(self) -> float:
        return self.d2edTdP / self.epsilon ** 2 - 2 * self.epsilon * self.YBorn * self.QBorn

    def as_dict(self) -> Dict[str, float]:
        out = {f.name: getattr(self, f.name) for f in fields(self)}
        for name in ["alpha", "daldT", "beta", "ZBorn", "YBorn", "XBorn",
                     "QBorn", "NBorn", "UBorn"]:
            out[name] = getattr(self, name)
        return out


class WaterIF97:
    """
    Solvent state provider for liquid water.

    The provider holds the most recent state pushed with set_state(). The
    pure method evaluate() computes a snapshot without changing the held
    state. Pressures passed to the provider are in Pa.

    Parameters
    ----------
    T : float
        Initial temperature in K
    P : float
        Initial pressure in Pa
    """

    T_min = 273.15
    T_max = 623.15
    # bar
    P_max = 1000.0

    def __init__(self, T: float = 298.15, P: float = 101325.0):
        self.state = self.evaluate(T, P)

    def __repr__(self) -> str:
        return f"WaterIF97(T={self.state.T}, P={self.state.P} bar)"

    def evaluate(self, T: float, P: float) -> WaterState:
        """
        Calculate the properties of liquid water.

        Parameters
        ----------
        T : float
            Temperature in K
        P : float
            Pressure in Pa

        Returns
        -------
        WaterState
        """
        T = float(T)
        P_bar = float(P) / 1e5
        self._check_range(T, P_bar)

        # derivatives from IF97 are per MPa; 1 bar = 0.1 MPa
        vd = region1_volume(T, P_bar / 10)
        v = vd["v"]
        v_T = vd["v_T"]
        v_TT = vd["v_TT"]
        v_P = vd["v_P"] / 10
        v_PP = vd["v_PP"] / 100
        v_TP = vd["v_TP"] / 10

        rho = 1 / v
        drhodT = -v_T / v ** 2
        drhodP = -v_P / v ** 2
        d2rhodT2 = -v_TT / v ** 2 + 2 * v_T ** 2 / v ** 3
        d2rhodP2 = -v_PP / v ** 2 + 2 * v_P ** 2 / v ** 3
        d2rhodTdP = -v_TP / v ** 2 + 2 * v_T * v_P / v ** 3

        # chain rule from (T, rhohat) to (T, P); rhohat in g/cm3
        eps = epsilon_JN91(T, rho)
        D_T = drhodT / 1000
        D_P = drhodP / 1000
        D_TT = d2rhodT2 / 1000
        D_PP = d2rhodP2 / 1000
        D_TP = d2rhodTdP / 1000
        dedT = eps["dedT"] + eps["dedD"] * D_T
        d2edT2 = eps["d2edT2"] + 2 * eps["d2edTdD"] * D_T + eps["d2edD2"] * D_T ** 2 + eps["dedD"] * D_TT
        dedP = eps["dedD"] * D_P
        d2edP2 = eps["d2edD2"] * D_P ** 2 + eps["dedD"] * D_PP
        d2edTdP = eps["d2edTdD"] * D_P + eps["d2edD2"] * D_T * D_P + eps["dedD"] * D_TP

        return WaterState(
            T=T, P=P_bar, rho=rho,
            drhodT=drhodT, d2rhodT2=d2rhodT2, drhodP=drhodP,
            d2rhodP2=d2rhodP2, d2rhodTdP=d2rhodTdP,
            epsilon=float(eps["epsilon"]), dedT=float(dedT), d2edT2=float(d2edT2),
            dedP=float(dedP), d2edP2=float(d2edP2), d2edTdP=float(d2edTdP),
        )

    def set_state(self, T: float, P: float) -> WaterState:
        """Set the temperature (K) and pressure (Pa) and return the new snapshot."""
        self.state = self.evaluate(T, P)
        return self.state

    def _check_range(self, T: float, P_bar: float) -> None:
        if not (self.T_min <= T <= self.T_max):
            raise WaterModelError(
                f"T = {T} K is outside the range of the liquid water model "
                f"({self.T_min}-{self.T_max} K)")
        if P_bar > self.P_max:
            raise WaterModelError(
                f"P = {P_bar} bar is above the limit of the liquid water model ({self.P_max} bar)")
        Psat_bar = psat_if97(T) * 10
        # small tolerance so that P = Psat(T) passes
        if P_bar < Psat_bar * (1 - 1e-9):
            raise WaterModelError(
                f"P = {P_bar} bar is below the saturation pressure ({Psat_bar:.6g} bar) at T = {T} K")

    def psat(self, T: float) -> float:
        """Saturation pressure of water (Pa)."""
        return psat_if97(float(T)) * 1e6

    def pref_safe(self, T: float, Pref: float = 101325.0) -> float:
        """
        Reference pressure (Pa) that keeps water liquid: Pref below the
        boiling point and the saturation pressure above it.
        """
        return max(Pref, self.psat(T))

    def duplicate(self) -> "WaterIF97":
        """Return an independent copy of this provider and its state."""
        return copy.deepcopy(self)

    def crit_temperature(self) -> float:
        """Critical temperature (K)."""
        return T_CRIT

    def crit_pressure(self) -> float:
        """Critical pressure (Pa)."""
        return P_CRIT * 1e6

    def crit_density(self) -> float:
        """Critical density (kg/m3)."""
        return RHO_CRIT


def water(property: Optional[Union[str, List[str]]] = None,
          T: Union[float, np.ndarray, List[float]] = 298.15,
          P: Union[float, np.ndarray, List[float], str] = 1.0,
          Psat_floor: Union[float, None] = 1.0) -> Union[np.ndarray, Dict[str, Any]]:
    """
    Calculate thermodynamic and electrostatic properties of liquid H2O.

    Parameters
    ----------
    property : str, list of str, or None
        Properties to calculate, any of the WaterState fields (e.g. 'rho',
        'epsilon', 'alpha', 'beta', 'QBorn', 'YBorn', 'XBorn') or 'Psat'.
        If None, all properties are returned.
    T : float or array-like
        Temperature in Kelvin
    P : float, array-like, or "Psat"
        Pressure in bar, or "Psat" for saturation pressure
    Psat_floor : float or None
        Minimum pressure (bar) used when P is "Psat"

    Returns
    -------
    array or dict
        Array of values for a single property, or dictionary of arrays

    Examples
    --------
    >>> rho = water('rho', T=298.15, P=1.0)
    >>> props = water(['rho', 'epsilon'], T=[298.15, 373.15], P='Psat')
    """
    T = np.atleast_1d(np.asarray(T, dtype=float))
    provider = WaterIF97()

    if isinstance(P, str):
        if P.lower() != "psat":
            raise WaterModelError(f"P must be numeric or 'Psat', got {P!r}")
        P = np.array([provider.psat(t) / 1e5 for t in T])
        if Psat_floor is not None:
            P = np.maximum(P, Psat_floor)
    P = np.atleast_1d(np.asarray(P, dtype=float))
    T, P = np.broadcast_arrays(T, P)

    single = isinstance(property, str)
    if property is None:
        props = None
    else:
        props = [property] if single else list(property)

    rows = []
    for t, p in zip(T, P):
        row = provider.evaluate(t, p * 1e5).as_dict()
        row["Psat"] = provider.psat(t) / 1e5
        rows.append(row)

    names = props if props is not None else list(rows[0].keys())
    for name in names:
        if name not in rows[0]:
            raise WaterModelError(f"water: unknown property {name}")
    out = {name: np.array([row[name] for row in rows]) for name in names}

    if single:
        return out[property]
    return out
