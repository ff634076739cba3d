"""
Calculation options and the element table, held in one object as in the
'thermo' object of CHNOSZ.

    >>> thermo("opt$E.units")
    'J'
    >>> old = thermo(**{"opt$E.units": "cal"})
    >>> _ = thermo(**old)    # restore
"""

import pandas as pd
from typing import Optional, Dict, Any

from ..data.loader import DataLoader


DEFAULT_OPTIONS = {
    # energy units of the values returned by the standard-state accessors
    'E.units': 'J',
    # tolerance (cal mol-1) for the consistency check of G, H and S
    'G.tol': 100,
    # relative tolerance for omega recalculated from the electrostatic radius
    'omega.tol': 1e-3,
}

# allowed values of options with a fixed set of choices
OPTION_CHOICES = {
    'E.units': ('J', 'cal'),
}


class ThermoSystem:
    """
    Options and element data used by pyhkft.

    The data are loaded on first use; reset() restores the defaults.

    Attributes
    ----------
    opt : dict
        Calculation options (see DEFAULT_OPTIONS)
    element : pandas.DataFrame
        Element table with columns element, state, source, mass, s, n
    """

    def __init__(self, data_loader: Optional[DataLoader] = None):
        self._loader = data_loader if data_loader is not None else DataLoader()
        self._initialized = False
        self.opt: Dict[str, Any] = {}
        self.element: Optional[pd.DataFrame] = None

    def reset(self, messages: bool = True) -> None:
        """
        Load the default options and the element table.

        Parameters
        ----------
        messages : bool, default True
            Print a message when done
        """
        try:
            element = self._loader.load_elements()
        except (OSError, pd.errors.ParserError) as e:
            raise RuntimeError(f"reset: could not load the element table: {e}") from e
        self.opt = dict(DEFAULT_OPTIONS)
        self.element = element
        self._initialized = True
        if messages:
            print(f'reset: loaded options and {len(element)} elements')

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            self.reset(messages=False)

    def is_initialized(self) -> bool:
        return self._initialized

    def get_option(self, key: str, default: Any = None) -> Any:
        self._ensure_initialized()
        return self.opt.get(key, default)

    def set_option(self, key: str, value: Any) -> None:
        self._ensure_initialized()
        choices = OPTION_CHOICES.get(key)
        if choices is not None and value not in choices:
            raise ValueError(f"{key} must be one of {', '.join(choices)}, got {value!r}")
        self.opt[key] = value

    def get_element(self) -> pd.DataFrame:
        self._ensure_initialized()
        return self.element

    def __repr__(self) -> str:
        if not self._initialized:
            return "ThermoSystem(not loaded)"
        return f"ThermoSystem(elements={len(self.element)}, E.units={self.opt.get('E.units')})"


_thermo_system: Optional[ThermoSystem] = None


def get_thermo_system() -> ThermoSystem:
    """Return the shared ThermoSystem, creating it on first use."""
    global _thermo_system
    if _thermo_system is None:
        _thermo_system = ThermoSystem()
    return _thermo_system


def thermo(*args, messages=False, **kwargs):
    """
    Get or set parts of the thermodynamic system.

    Parameters
    ----------
    *args : str
        Names of the parts to get; "$" separates nested names
        (e.g. "opt$E.units", "element")
    messages : bool, default False
        Print a message if the system is loaded by this call
    **kwargs : any
        Parts to set, named the same way (e.g. **{"opt$G.tol": 50})

    Returns
    -------
    various
        With no arguments, the ThermoSystem. With names to get, the value
        (or a list of values). With values to set, a dict of the previous
        values, which can be passed back to restore them.
    """
    system = get_thermo_system()
    if not args and not kwargs:
        return system
    if not system.is_initialized():
        system.reset(messages=messages)

    if kwargs:
        old = {}
        for key, value in kwargs.items():
            old[key] = _get_slot(system, key)
            _set_slot(system, key, value)
        return old

    for arg in args:
        if not isinstance(arg, str):
            raise TypeError(f"thermo: names must be strings, got {type(arg)}")
    values = [_get_slot(system, arg) for arg in args]
    return values[0] if len(values) == 1 else values


def _get_slot(system: ThermoSystem, name: str) -> Any:
    value: Any = system
    for slot in name.split('$'):
        if isinstance(value, dict):
            if slot not in value:
                raise AttributeError(f"thermo: no component '{name}'")
            value = value[slot]
        elif hasattr(value, slot):
            value = getattr(value, slot)
        else:
            raise AttributeError(f"thermo: no component '{name}'")
    return value


def _set_slot(system: ThermoSystem, name: str, value: Any) -> None:
    slots = name.split('$')
    if len(slots) == 2 and slots[0] == 'opt':
        system.set_option(slots[1], value)
    elif len(slots) == 1 and hasattr(system, name):
        setattr(system, name, value)
    else:
        raise AttributeError(f"thermo: cannot set '{name}'")
