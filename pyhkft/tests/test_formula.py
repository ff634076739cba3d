"""
Tests for formula parsing, masses and elemental entropies.
Run with: python -m pytest pyhkft/tests/ -v
"""

import pytest

from pyhkft import makeup, mass, entropy, FormulaError
from pyhkft.utils.formula import calculate_ghs
from pyhkft.utils.units import convert


def test_makeup_simple():
    assert makeup("H2O") == {"H": 2.0, "O": 1.0}, f"makeup(H2O) = {makeup('H2O')}"


def test_makeup_charge():
    assert makeup("Na+") == {"Na": 1.0, "Z": 1.0}
    assert makeup("SO4-2") == {"S": 1.0, "O": 4.0, "Z": -2.0}
    assert makeup("Cl-") == {"Cl": 1.0, "Z": -1.0}


def test_makeup_parentheses():
    result = makeup("Ca(OH)2")
    assert result == {"Ca": 1.0, "O": 2.0, "H": 2.0}, f"makeup(Ca(OH)2) = {result}"


def test_makeup_multiplier():
    assert makeup("CO2", multiplier=2) == {"C": 2.0, "O": 4.0}


def test_makeup_unknown_element_warns():
    with pytest.warns(UserWarning):
        makeup("Xx2")


def test_mass():
    assert abs(mass("H2O") - 18.015) < 0.001, f"mass(H2O) = {mass('H2O')}"
    assert abs(mass("Na+") - 22.990) < 0.001, "charge has no mass"
    assert mass(["Na+", "Cl-"]) == [mass("Na+"), mass("Cl-")]


def test_mass_unknown_element():
    with pytest.warns(UserWarning):
        with pytest.raises(FormulaError):
            mass("Xx")


def test_entropy_of_elements():
    # (S(H2) + 1/2 S(O2)) in J K-1 mol-1
    expected = (31.233 + 49.032 / 2) * 4.184
    assert abs(entropy("H2O") - expected) < 1e-9, f"entropy(H2O) = {entropy('H2O')}"


def test_entropy_of_proton_is_zero():
    assert abs(entropy("H+")) < 1e-9, "charge is counted as -1/2 H2"


def test_calculate_ghs_fills_missing_value():
    Se = entropy("Na+") / 4.184
    ghs = calculate_ghs("Na+", G=-62591, S=13.96, E_units="cal")
    assert abs(ghs["H"] - (-62591 + 298.15 * (13.96 - Se))) < 1e-9
    ghs = calculate_ghs("Na+", G=-62591, H=ghs["H"], E_units="cal")
    assert abs(ghs["S"] - 13.96) < 1e-9


def test_convert():
    assert abs(convert(25, "K") - 298.15) < 1e-9
    assert convert(1, "J") == 4.184
    assert convert(1, "Pa") == 1e5
    assert convert(10, "MPa") == 1
