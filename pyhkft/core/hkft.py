"""
Standard-state properties of an aqueous species from the revised HKF
equations of state (Helgeson-Kirkham-Flowers-Tanger).

The evaluator holds the parameters of one species and the current
temperature and pressure. Setting the state pushes it once to the solvent
provider and keeps the returned snapshot of water properties; all property
accessors are calculated from that snapshot.

Temperatures are in K and pressures in Pa. Energies are returned in the
units of the option 'E.units' (J or cal) per mole, volumes in m3 mol-1 and
density in kg m-3.

References:
- Johnson, J.W. et al. (1992). SUPCRT92. Computers & Geosciences, 18(7), 899-947.
  deltaG is Eq. 59; deltaS corrects Eq. 61.
- Shock, E.L. et al. (1992). J. Chem. Soc. Faraday Trans., 88(6), 803-826.
"""

import copy
import math
from typing import Optional, Dict

from .species import HKFTParameters
from ..models.hkf import (Tr, Pr, Theta, Psi, ag, bg, gfun, ffun, gstar,
                          born_omega, convert_cm3bar)
from ..models.water import WaterIF97, WaterState
from ..utils.formula import mass
from ..utils.units import outvert

# gas constant, J K-1 mol-1
R = 8.314462618
# reference pressure in Pa
Pr_Pa = Pr * 1e5

_G_KEYS = ["g", "dgdT", "d2gdT2", "dgdP"]
_F_KEYS = ["f", "dfdT", "d2fdT2", "dfdP"]


def _check_ifunc(ifunc):
    if ifunc not in (0, 1, 2, 3):
        raise ValueError(f"ifunc must be 0, 1, 2 or 3, got {ifunc}")


class HKFT:
    """
    Revised HKF standard state of one aqueous species.

    Parameters
    ----------
    parameters : HKFTParameters
        Equation-of-state parameters and reference-state properties
    water : solvent provider, optional
        Provider of water properties (e.g. WaterIF97). May be shared with
        other evaluators; a new WaterIF97 is created if not given.
    T : float
        Initial temperature (K)
    P : float, optional
        Initial pressure (Pa), default 1 atm

    Examples
    --------
    >>> from pyhkft import HKFT, HKFTParameters
    >>> na = HKFTParameters(name="Na+", formula="Na+", G=-62591, H=-57433, S=13.96,
    ...                     a1=0.1839, a2=-228.5, a3=3.256, a4=-27260,
    ...                     c1=18.18, c2=-29810, omega=33060, z=1)
    >>> ss = HKFT(na)
    >>> ss.set_state_TP(373.15, 10e5)
    >>> G = ss.gibbs_mole()
    """

    model = "HKF"

    def __init__(self, parameters: HKFTParameters, water=None,
                 T: float = Tr, P: Optional[float] = None):
        if not isinstance(parameters, HKFTParameters):
            raise TypeError(f"parameters must be HKFTParameters, got {type(parameters)}")
        self.parameters = parameters
        self.water = water if water is not None else WaterIF97()
        self._mw = mass(parameters.formula)

        # water at the reference state, evaluated without changing the provider
        self._water_r = self.water.evaluate(Tr, Pr_Pa)
        self._ZBorn_r = self._water_r.ZBorn
        self._YBorn_r = self._water_r.YBorn

        # snapshot of water at (T, Pref(T)) for the reference-pressure accessors
        self._ref_water: Optional[WaterState] = None

        self._T = None
        self._P = None
        self.set_state_TP(T, Pr_Pa if P is None else P)

    def __repr__(self) -> str:
        return (f"HKFT({self.parameters.name}, T={self._T} K, P={self._P} Pa)")

    # state

    def set_state_TP(self, T: float, P: float) -> None:
        """Set the temperature (K) and pressure (Pa)."""
        assert T > 0, f"temperature must be positive, got {T}"
        assert P > 0, f"pressure must be positive, got {P}"
        self._push_state(float(T), float(P))

    def set_temperature(self, T: float) -> None:
        """Set the temperature (K) at the current pressure."""
        self.set_state_TP(T, self._P)

    def set_pressure(self, P: float) -> None:
        """Set the pressure (Pa) at the current temperature."""
        self.set_state_TP(self._T, P)

    def _push_state(self, T: float, P: float) -> None:
        # the only place where the solvent state is changed; nothing is
        # assigned unless the provider and the properties succeed
        ws = self.water.set_state(T, P)
        omega = self._born(ws)
        props = self._properties(ws, omega)
        self._T, self._P = T, P
        self._water_state, self._omega, self._props = ws, omega, props

    def temperature(self) -> float:
        """Current temperature (K)."""
        return self._T

    def pressure(self) -> float:
        """Current pressure (Pa)."""
        return self._P

    def ref_pressure(self) -> float:
        """
        Reference pressure Pr (Pa), 1 atm.

        The *_ref accessors are evaluated at ref_state_pressure(), which is Pr
        below the boiling point and the saturation pressure above it.
        """
        return Pr_Pa

    def ref_state_pressure(self) -> float:
        """Pressure (Pa) of the *_ref accessors at the current T: max(Pr, Psat(T))."""
        return self.water.pref_safe(self._T, Pr_Pa)

    @property
    def water_state(self) -> WaterState:
        """Snapshot of water properties taken at the last state change."""
        return self._water_state

    def duplicate(self, share_solvent: bool = False) -> "HKFT":
        """
        Copy this evaluator with its parameters and state.

        Parameters
        ----------
        share_solvent : bool, default False
            If True, the copy uses the same solvent provider; otherwise it
            gets an independent copy of the provider.
        """
        new = copy.copy(self)
        new.water = self.water if share_solvent else self.water.duplicate()
        return new

    # electrostatic correlation functions

    def _water_at(self, T: float, P: float) -> WaterState:
        if T == self._T and P == self._P:
            return self._water_state
        return self.water.evaluate(T, P)

    def ag(self, T: float, ifunc: int = 0) -> float:
        """Coefficient ag of the g function or its T derivatives."""
        _check_ifunc(ifunc)
        return float(ag(T, ifunc))

    def bg(self, T: float, ifunc: int = 0) -> float:
        """Coefficient bg of the g function or its T derivatives."""
        _check_ifunc(ifunc)
        return float(bg(T, ifunc))

    def g(self, T: float, P: float, ifunc: int = 0) -> float:
        """
        g function (Angstrom) at T (K) and P (Pa).

        ifunc: 0 value, 1 dT, 2 d2T, 3 dP (per bar)
        """
        _check_ifunc(ifunc)
        assert T > 0 and P > 0
        ws = self._water_at(T, P)
        out = gfun(ws.rho / 1000, ws.T, ws.alpha, ws.daldT, ws.beta)
        return float(out[_G_KEYS[ifunc]])

    def f(self, T: float, P: float, ifunc: int = 0) -> float:
        """
        f function (Angstrom) at T (K) and P (Pa); zero above 500 K.

        ifunc: 0 value, 1 dT, 2 d2T, 3 dP (per bar)
        """
        _check_ifunc(ifunc)
        assert T > 0 and P > 0
        out = ffun(T, P / 1e5)
        return float(out[_F_KEYS[ifunc]])

    def gstar(self, T: float, P: float, ifunc: int = 0) -> float:
        """
        g function with the f correction, g - f, at T (K) and P (Pa).

        ifunc: 0 value, 1 dT, 2 d2T, 3 dP (per bar)
        """
        _check_ifunc(ifunc)
        assert T > 0 and P > 0
        ws = self._water_at(T, P)
        out = gstar(ws.rho / 1000, ws.T, ws.P, ws.alpha, ws.daldT, ws.beta)
        return float(out[_G_KEYS[ifunc]])

    def _born(self, ws: WaterState) -> Dict[str, float]:
        p = self.parameters
        g = gstar(ws.rho / 1000, ws.T, ws.P, ws.alpha, ws.daldT, ws.beta)
        return {k: float(v) for k, v in born_omega(p.omega, p.z, g).items()}

    # reference offsets (cal)

    def _delta_G(self, ws: WaterState, w: Dict[str, float]) -> float:
        p = self.parameters
        T, P = ws.T, ws.P
        lnP = math.log((Psi + P) / (Psi + Pr))
        # nonsolvation
        dG = -p.c1 * (T * math.log(T / Tr) - T + Tr) \
            - p.c2 * ((1 / (T - Theta) - 1 / (Tr - Theta)) * ((Theta - T) / Theta)
                      - (T / Theta ** 2) * math.log((Tr * (T - Theta)) / (T * (Tr - Theta)))) \
            + p.a1 * (P - Pr) + p.a2 * lnP \
            + (p.a3 * (P - Pr) + p.a4 * lnP) / (T - Theta)
        # solvation
        dG += -w["omega"] * (ws.ZBorn + 1) + p.omega * (self._ZBorn_r + 1) \
            + p.omega * self._YBorn_r * (T - Tr)
        return dG

    def _delta_S(self, ws: WaterState, w: Dict[str, float]) -> float:
        p = self.parameters
        T, P = ws.T, ws.P
        lnP = math.log((Psi + P) / (Psi + Pr))
        # nonsolvation
        dS = p.c1 * math.log(T / Tr) \
            - (p.c2 / Theta) * (1 / (T - Theta) - 1 / (Tr - Theta)
                                + math.log((Tr * (T - Theta)) / (T * (Tr - Theta))) / Theta) \
            + (p.a3 * (P - Pr) + p.a4 * lnP) / (T - Theta) ** 2
        # solvation; the (Z + 1) dw/dT term is missing from Eq. 61
        dS += w["omega"] * ws.YBorn + (ws.ZBorn + 1) * w["dwdT"] - p.omega * self._YBorn_r
        return dS

    def _properties(self, ws: WaterState, w: Dict[str, float]) -> Dict[str, float]:
        """Standard-state properties at one state, in cal and bar units."""
        p = self.parameters
        T, P = ws.T, ws.P
        lnP = math.log((Psi + P) / (Psi + Pr))
        dG = self._delta_G(ws, w)
        dS = self._delta_S(ws, w)

        G = p.mu0 - p.S * (T - Tr) + dG
        S = p.S + dS
        H = G + T * S

        Cp = p.c1 + p.c2 / (T - Theta) ** 2 \
            - 2 * T / (T - Theta) ** 3 * (p.a3 * (P - Pr) + p.a4 * lnP) \
            + w["omega"] * T * ws.XBorn + 2 * T * ws.YBorn * w["dwdT"] \
            + T * (ws.ZBorn + 1) * w["d2wdT2"]

        # cal mol-1 bar-1
        V = p.a1 + p.a2 / (Psi + P) + (p.a3 + p.a4 / (Psi + P)) / (T - Theta) \
            - w["omega"] * ws.QBorn - (ws.ZBorn + 1) * w["dwdP"]

        # derivatives of omega are not included in the solvation parts of E and kT
        E = -(p.a3 + p.a4 / (Psi + P)) / (T - Theta) ** 2 - w["omega"] * ws.UBorn
        kT = (p.a2 + p.a4 / (T - Theta)) / (Psi + P) ** 2 + w["omega"] * ws.NBorn
        Cv = Cp if kT == 0 else Cp - T * E ** 2 / kT

        return {"dG": dG, "dS": dS, "G": G, "H": H, "S": S, "U": H - P * V,
                "Cp": Cp, "Cv": Cv, "V": V, "E": E, "kT": kT}

    def _ref_properties(self) -> Dict[str, float]:
        T = self._T
        ws = self._ref_water
        if ws is None or ws.T != T:
            ws = self.water.evaluate(T, self.water.pref_safe(T, Pr_Pa))
            self._ref_water = ws
        return self._properties(ws, self._born(ws))

    # reference offsets

    def delta_G(self) -> float:
        """Gibbs energy at T, P minus that at Tr, Pr, without the -S(T - Tr) term."""
        return float(outvert(self._props["dG"], "cal"))

    def delta_S(self) -> float:
        """Entropy at T, P minus that at Tr, Pr."""
        return float(outvert(self._props["dS"], "cal"))

    # properties at T, P

    def gibbs_mole(self) -> float:
        return float(outvert(self._props["G"], "cal"))

    def enthalpy_mole(self) -> float:
        return float(outvert(self._props["H"], "cal"))

    def entropy_mole(self) -> float:
        return float(outvert(self._props["S"], "cal"))

    def int_energy_mole(self) -> float:
        return float(outvert(self._props["U"], "cal"))

    def cp_mole(self) -> float:
        return float(outvert(self._props["Cp"], "cal"))

    def cv_mole(self) -> float:
        return float(outvert(self._props["Cv"], "cal"))

    def molar_volume(self) -> float:
        """Standard partial molar volume (m3 mol-1)."""
        return float(convert_cm3bar(self._props["V"])) * 1e-6

    def expansivity(self) -> float:
        """Temperature derivative of the volume at constant P (m3 mol-1 K-1)."""
        return float(convert_cm3bar(self._props["E"])) * 1e-6

    def compressibility(self) -> float:
        """Negative pressure derivative of the volume at constant T (m3 mol-1 Pa-1)."""
        return float(convert_cm3bar(self._props["kT"])) * 1e-6 / 1e5

    def density(self) -> float:
        """Molecular weight divided by the molar volume (kg m-3); negative if V < 0."""
        V = self.molar_volume()
        if V == 0:
            return math.inf
        return self._mw / 1000 / V

    def gibbs_RT(self) -> float:
        return self._props["G"] * 4.184 / (R * self._T)

    def enthalpy_RT(self) -> float:
        return self._props["H"] * 4.184 / (R * self._T)

    def entropy_R(self) -> float:
        return self._props["S"] * 4.184 / R

    def cp_R(self) -> float:
        return self._props["Cp"] * 4.184 / R

    # properties at T and the reference pressure

    def gibbs_RT_ref(self) -> float:
        return self._ref_properties()["G"] * 4.184 / (R * self._T)

    def enthalpy_RT_ref(self) -> float:
        return self._ref_properties()["H"] * 4.184 / (R * self._T)

    def entropy_R_ref(self) -> float:
        return self._ref_properties()["S"] * 4.184 / R

    def cp_R_ref(self) -> float:
        return self._ref_properties()["Cp"] * 4.184 / R

    def molar_volume_ref(self) -> float:
        """Standard partial molar volume at T and the reference pressure (m3 mol-1)."""
        return float(convert_cm3bar(self._ref_properties()["V"])) * 1e-6

    # solvent

    def crit_temperature(self) -> float:
        return self.water.crit_temperature()

    def crit_pressure(self) -> float:
        return self.water.crit_pressure()

    def crit_density(self) -> float:
        return self.water.crit_density()
