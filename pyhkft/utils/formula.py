"""
Chemical formulas of aqueous species.

Functions equivalent to CHNOSZ makeup() and the mass and entropy parts of
util.formula.R, over the element table in thermo().element:
- makeup(): elemental composition, with the charge as the element Z
- mass(): molecular weight
- entropy(): entropy of the elements in their reference states
- calculate_ghs(): fill in one missing value of G, H, S
"""

import re
import warnings
import numpy as np
import pandas as pd
from typing import Union, List, Dict, Tuple

from ..core.thermo import thermo


class FormulaError(Exception):
    """Exception raised for formula parsing errors."""
    pass


_ELEMENT = re.compile(r'[A-Z][a-z]*')
_NUMBER = re.compile(r'\d*\.?\d+')
# trailing charge: +, -, +2, -0.5
_CHARGE = re.compile(r'([+-])(\d*\.?\d*)$')


def makeup(formula: Union[str, List[str]],
           multiplier: float = 1.0) -> Union[Dict[str, float], List[Dict[str, float]]]:
    """
    Return the elemental composition of chemical formula(s).

    Parenthesized groups may be nested, and a suffixed part after '*' or ':'
    (e.g. CaSO4*2H2O) may carry a leading coefficient. The charge is counted
    as the pseudo-element 'Z'.

    Parameters
    ----------
    formula : str or list of str
        Chemical formula(s)
    multiplier : float
        Multiplier applied to the counts

    Returns
    -------
    dict or list of dict
        {element: count}

    Examples
    --------
    >>> makeup("H2O")
    {'H': 2.0, 'O': 1.0}
    >>> makeup("HCO3-")
    {'H': 1.0, 'C': 1.0, 'O': 3.0, 'Z': -1.0}
    """
    if isinstance(formula, list):
        return [makeup(f, multiplier) for f in formula]
    if formula is None or pd.isna(formula):
        return None

    body, charge = _split_charge(str(formula).strip())
    counts: Dict[str, float] = {}
    for part in re.split(r'[*:]', body):
        coefficient, start = _read_number(part, 0)
        _accumulate(counts, _parse_group(part[start:], formula), coefficient)
    if charge != 0:
        counts['Z'] = counts.get('Z', 0) + charge

    if multiplier != 1.0:
        counts = {element: n * multiplier for element, n in counts.items()}
    _validate_elements(counts)
    return counts


def _split_charge(formula: str) -> Tuple[str, float]:
    match = _CHARGE.search(formula)
    if not match:
        return formula, 0
    sign = 1 if match.group(1) == '+' else -1
    magnitude = float(match.group(2)) if match.group(2) else 1
    return formula[:match.start()], sign * magnitude


def _read_number(text: str, pos: int) -> Tuple[float, int]:
    match = _NUMBER.match(text, pos)
    if match:
        return float(match.group()), match.end()
    return 1.0, pos


def _accumulate(counts: Dict[str, float], other: Dict[str, float], n: float) -> None:
    for element, count in other.items():
        counts[element] = counts.get(element, 0) + count * n


def _parse_group(text: str, formula) -> Dict[str, float]:
    counts, pos = _read_sequence(text, 0, formula)
    if pos != len(text):
        raise FormulaError(f"unpaired parentheses in formula '{formula}'")
    return counts


def _read_sequence(text: str, pos: int, formula) -> Tuple[Dict[str, float], int]:
    """Read elements and groups until a closing parenthesis or the end of text."""
    counts: Dict[str, float] = {}
    while pos < len(text):
        if text[pos] == ')':
            break
        if text[pos] == '(':
            inner, pos = _read_sequence(text, pos + 1, formula)
            if pos >= len(text):
                raise FormulaError(f"unpaired parentheses in formula '{formula}'")
            n, pos = _read_number(text, pos + 1)
            _accumulate(counts, inner, n)
            continue
        match = _ELEMENT.match(text, pos)
        if not match:
            raise FormulaError(f"'{formula}' is not a chemical formula")
        n, pos = _read_number(text, match.end())
        counts[match.group()] = counts.get(match.group(), 0) + n
    return counts, pos


def _validate_elements(composition: Dict[str, float]) -> None:
    """Warn about elements that are not in the element table."""
    known = set(thermo().get_element()['element'])
    unknown = sorted(set(composition) - known - {'Z'})
    if unknown:
        warnings.warn(f"element(s) not in thermo().element: {' '.join(unknown)}")


def _element_table() -> pd.DataFrame:
    return thermo().get_element().set_index('element')


def _lookup(table: pd.DataFrame, element: str) -> pd.Series:
    if element not in table.index:
        raise FormulaError(f"Element {element} not found in element database")
    return table.loc[element]


def mass(formula: Union[str, List[str]]) -> Union[float, List[float]]:
    """
    Molecular weight (g mol-1) of chemical formula(s). The charge has no mass.
    """
    if isinstance(formula, list):
        return [mass(f) for f in formula]
    table = _element_table()
    return float(sum(n * _lookup(table, element)['mass']
                     for element, n in makeup(formula).items() if element != 'Z'))


def entropy(formula: Union[str, List[str]]) -> Union[float, List[float]]:
    """
    Standard molal entropy of the elements in a formula.

    Each element contributes s/n per atom, where s is the entropy of n atoms
    in the reference state of the element. The pseudo-element Z of the
    charge has the entropy of -1/2 H2(gas).

    Parameters
    ----------
    formula : str or list of str
        Chemical formula(s)

    Returns
    -------
    float or list of float
        Entropy in J K-1 mol-1
    """
    if isinstance(formula, list):
        return [entropy(f) for f in formula]
    table = _element_table()
    total = 0.0
    for element, n in makeup(formula).items():
        row = _lookup(table, element)
        if pd.isna(row['s']) or pd.isna(row['n']):
            raise FormulaError(f"Entropy of element {element} is not available")
        total += n * row['s'] / row['n']
    # element table is in cal
    return total * 4.184


def calculate_ghs(formula: str, G: float = np.nan, H: float = np.nan,
                  S: float = np.nan, T: float = 298.15,
                  E_units: str = "J") -> Dict[str, float]:
    """
    Fill in one missing value of G, H, S of formation.

    Uses G = H - T * (S - Se), where Se is the entropy of the elements.

    Parameters
    ----------
    formula : str
        Chemical formula
    G, H, S : float
        Gibbs energy and enthalpy of formation, and third-law entropy;
        one of them may be NaN
    T : float
        Temperature in K
    E_units : str
        Energy units of G, H, S ("J" or "cal")

    Returns
    -------
    dict
        G, H, S
    """
    Se = entropy(formula)
    if E_units == "cal":
        Se /= 4.184
    if pd.isna(G):
        G = H - T * (S - Se)
    elif pd.isna(H):
        H = G + T * (S - Se)
    elif pd.isna(S):
        S = Se + (H - G) / T
    return {"G": G, "H": H, "S": S}
