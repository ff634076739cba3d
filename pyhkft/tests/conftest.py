"""
Shared fixtures: OBIGT-style records of aqueous species (cal units, with the
OBIGT scale factors) from SUPCRT92 and Shock et al. (1997).
"""

import pytest

from pyhkft import thermo, HKFTParameters


@pytest.fixture
def na_row():
    return {"name": "Na+", "formula": "Na+", "state": "aq", "E_units": "cal", "model": "HKF",
            "G": -62591, "H": -57433, "S": 13.96,
            "a1.a": 1.8390, "a2.b": -2.2850, "a3.c": 3.2560, "a4.d": -2.7260,
            "c1.e": 18.18, "c2.f": -2.981, "omega.lambda": 0.3306, "z.T": 1}


@pytest.fixture
def cl_row():
    return {"name": "Cl-", "formula": "Cl-", "state": "aq", "E_units": "cal", "model": "HKF",
            "G": -31379, "H": -39933, "S": 13.56,
            "a1.a": 4.0320, "a2.b": 4.8010, "a3.c": 5.5630, "a4.d": -2.8470,
            "c1.e": -4.40, "c2.f": -5.7140, "omega.lambda": 1.4560, "z.T": -1}


@pytest.fixture
def co2_row():
    return {"name": "CO2", "formula": "CO2", "state": "aq", "E_units": "cal", "model": "HKF",
            "G": -92250, "H": -98900, "S": 28.1,
            "a1.a": 6.2466, "a2.b": 7.4711, "a3.c": 2.8136, "a4.d": -3.0879,
            "c1.e": 40.0325, "c2.f": 8.8004, "omega.lambda": -0.0200, "z.T": 0}


@pytest.fixture
def na(na_row):
    return HKFTParameters.from_obigt(na_row)


@pytest.fixture
def cal_units():
    """Report energies in cal for the duration of a test."""
    old = thermo(**{"opt$E.units": "cal"})
    yield
    thermo(**old)
