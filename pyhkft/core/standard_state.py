"""
Common interface of standard-state models for aqueous species.

A phase holds one standard-state evaluator per species. The evaluator class
is selected by the 'model' tag of the species record; every evaluator
exposes the accessors of the StandardState protocol.
"""

import pandas as pd
from typing import Protocol, runtime_checkable, Union, Dict, Any, Optional

from .species import HKFTParameters, EOSParameterError
from .hkft import HKFT


@runtime_checkable
class StandardState(Protocol):
    """Accessors shared by the standard-state models."""

    def set_state_TP(self, T: float, P: float) -> None: ...

    def set_temperature(self, T: float) -> None: ...

    def set_pressure(self, P: float) -> None: ...

    def temperature(self) -> float: ...

    def pressure(self) -> float: ...

    def gibbs_mole(self) -> float: ...

    def enthalpy_mole(self) -> float: ...

    def entropy_mole(self) -> float: ...

    def int_energy_mole(self) -> float: ...

    def cp_mole(self) -> float: ...

    def cv_mole(self) -> float: ...

    def molar_volume(self) -> float: ...

    def density(self) -> float: ...

    def gibbs_RT_ref(self) -> float: ...

    def enthalpy_RT_ref(self) -> float: ...

    def entropy_R_ref(self) -> float: ...

    def cp_R_ref(self) -> float: ...

    def molar_volume_ref(self) -> float: ...

    def duplicate(self, share_solvent: bool = False) -> "StandardState": ...


# model tag -> (evaluator class, parameter class)
MODELS = {
    "HKF": (HKFT, HKFTParameters),
}


def standard_state(species: Union[HKFTParameters, Dict[str, Any], pd.Series],
                   water=None, T: float = 298.15,
                   P: Optional[float] = None) -> StandardState:
    """
    Create the standard-state evaluator for a species.

    Parameters
    ----------
    species : parameter object, dict or pandas Series
        Species parameters, or an OBIGT-style record
    water : solvent provider, optional
        Provider of water properties, possibly shared between species
    T : float
        Initial temperature (K)
    P : float, optional
        Initial pressure (Pa), default 1 atm

    Returns
    -------
    StandardState
    """
    if isinstance(species, pd.Series):
        species = species.to_dict()
    if isinstance(species, dict):
        model = species.get('model', 'HKF')
        if pd.isna(model):
            model = 'HKF'
    else:
        model = getattr(species, 'model', None)

    if model not in MODELS:
        raise EOSParameterError(f"standard-state model {model} is not available")
    cls, parameters_cls = MODELS[model]
    if isinstance(species, dict):
        species = parameters_cls.from_obigt(species)
    elif not isinstance(species, parameters_cls):
        raise EOSParameterError(f"parameters for model {model} must be {parameters_cls.__name__}")
    return cls(species, water=water, T=T, P=P)
