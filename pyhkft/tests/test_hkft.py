"""
Tests for the HKFT standard-state evaluator.
Values at 25 C are compared with SUPCRT92 (Johnson et al., 1992); higher
temperatures are checked for thermodynamic consistency.
"""

import numpy as np
import pytest

from pyhkft import (HKFT, HKFTParameters, StandardState, standard_state, thermo,
                    WaterIF97, WaterModelError, EOSParameterError)
from pyhkft.core.hkft import Pr_Pa


class CountingWater(WaterIF97):
    """Water provider that counts the state changes pushed to it."""

    def __init__(self, *args, **kwargs):
        self.n_set_state = 0
        super().__init__(*args, **kwargs)

    def set_state(self, T, P):
        self.n_set_state += 1
        return super().set_state(T, P)


def _proton():
    return HKFTParameters(name="H+", formula="H+", G=0.0, H=0.0, S=0.0,
                          a1=0.0, a2=0.0, a3=0.0, a4=0.0, c1=0.0, c2=0.0,
                          omega=0.0, z=1)


def test_reference_offsets_vanish_at_reference_state(na, cal_units):
    ss = HKFT(na)
    assert abs(ss.delta_G()) < 1e-6, f"deltaG = {ss.delta_G()}"
    assert abs(ss.delta_S()) < 1e-6, f"deltaS = {ss.delta_S()}"
    assert abs(ss.gibbs_mole() - na.mu0) < 1e-6
    assert abs(ss.entropy_mole() - na.S) < 1e-6


def test_gibbs_equals_enthalpy_minus_TS(na):
    ss = HKFT(na)
    for T, P in [(298.15, Pr_Pa), (373.15, 10e5), (473.15, 50e5), (573.15, 500e5)]:
        ss.set_state_TP(T, P)
        G, H, S = ss.gibbs_mole(), ss.enthalpy_mole(), ss.entropy_mole()
        assert np.isclose(G, H - T * S, rtol=1e-12, atol=1e-6), f"G != H - TS at {T} K"


def test_internal_energy(na):
    ss = HKFT(na, T=373.15, P=10e5)
    U = ss.enthalpy_mole() - ss.pressure() * ss.molar_volume()
    assert np.isclose(ss.int_energy_mole(), U, rtol=1e-9)


@pytest.mark.parametrize("row", ["na_row", "cl_row", "co2_row"])
@pytest.mark.parametrize("T, P", [(373.15, 10e5), (470.0, 100e5), (473.15, 20e5), (523.15, 500e5)])
def test_entropy_is_temperature_derivative_of_gibbs(request, row, T, P):
    ss = standard_state(request.getfixturevalue(row), T=T, P=P)
    S = ss.entropy_mole()
    dS = ss.delta_S()
    h = 0.01
    ss.set_temperature(T + h)
    G_hi, dG_hi = ss.gibbs_mole(), ss.delta_G()
    ss.set_temperature(T - h)
    G_lo, dG_lo = ss.gibbs_mole(), ss.delta_G()
    assert np.isclose(-(G_hi - G_lo) / (2 * h), S, rtol=1e-5, atol=1e-4), \
        f"S = {S}, -dG/dT = {-(G_hi - G_lo) / (2 * h)} for {row} at {T} K"
    assert np.isclose(-(dG_hi - dG_lo) / (2 * h), dS, rtol=1e-5, atol=1e-4), \
        f"deltaS = {dS}, -d(deltaG)/dT = {-(dG_hi - dG_lo) / (2 * h)} for {row} at {T} K"


@pytest.mark.parametrize("T, P", [(373.15, 10e5), (473.15, 20e5)])
def test_heat_capacity_is_temperature_derivative_of_entropy(cl_row, T, P):
    ss = standard_state(cl_row, T=T, P=P)
    Cp = ss.cp_mole()
    h = 0.01
    ss.set_temperature(T + h)
    S_hi = ss.entropy_mole()
    ss.set_temperature(T - h)
    S_lo = ss.entropy_mole()
    Cp_fd = T * (S_hi - S_lo) / (2 * h)
    assert np.isclose(Cp, Cp_fd, rtol=1e-4, atol=1e-3), f"Cp = {Cp}, T dS/dT = {Cp_fd} at {T} K"


@pytest.mark.parametrize("T, P", [(298.15, 10e5), (473.15, 100e5)])
def test_volume_is_pressure_derivative_of_gibbs(na_row, T, P):
    ss = standard_state(na_row, T=T, P=P)
    V = ss.molar_volume()
    h = 0.5e5
    ss.set_pressure(P + h)
    G_hi = ss.gibbs_mole()
    ss.set_pressure(P - h)
    G_lo = ss.gibbs_mole()
    V_fd = (G_hi - G_lo) / (2 * h)
    assert np.isclose(V, V_fd, rtol=1e-4, atol=1e-10), f"V = {V}, dG/dP = {V_fd} m3 mol-1"


def test_sodium_at_25C(na, cal_units):
    ss = HKFT(na)
    Cp = ss.cp_mole()
    V = ss.molar_volume() * 1e6
    assert abs(Cp - 9.06) < 1.5, f"Cp(Na+) = {Cp} cal K-1 mol-1"
    assert abs(V - (-1.11)) < 0.3, f"V(Na+) = {V} cm3 mol-1"


def test_density_of_ion_with_negative_volume(na):
    ss = HKFT(na)
    assert ss.molar_volume() < 0
    assert ss.density() < 0, "density follows the sign of the volume"
    assert np.isclose(ss.density(), 22.990 / 1000 / ss.molar_volume(), rtol=1e-9)


def test_energy_units(na):
    ss = HKFT(na, T=373.15, P=10e5)
    G_J = ss.gibbs_mole()
    Cp_J = ss.cp_mole()
    old = thermo(**{"opt$E.units": "cal"})
    try:
        assert old == {"opt$E.units": "J"}
        assert np.isclose(G_J / ss.gibbs_mole(), 4.184)
        assert np.isclose(Cp_J / ss.cp_mole(), 4.184)
    finally:
        thermo(**old)


def test_dimensionless_properties(na):
    ss = HKFT(na, T=373.15, P=10e5)
    R = 8.314462618
    assert np.isclose(ss.gibbs_RT(), ss.gibbs_mole() / (R * 373.15))
    assert np.isclose(ss.entropy_R(), ss.entropy_mole() / R)
    assert np.isclose(ss.cp_R(), ss.cp_mole() / R)


def test_reference_pressure_properties(na):
    ss = HKFT(na, T=363.15, P=200e5)
    ref = HKFT(na, T=363.15, P=Pr_Pa)
    assert np.isclose(ss.gibbs_RT_ref(), ref.gibbs_RT())
    assert np.isclose(ss.enthalpy_RT_ref(), ref.enthalpy_RT())
    assert np.isclose(ss.entropy_R_ref(), ref.entropy_R())
    assert np.isclose(ss.cp_R_ref(), ref.cp_R())
    assert np.isclose(ss.molar_volume_ref(), ref.molar_volume())


def test_reference_pressure_above_boiling(na):
    # at 200 C the reference properties are at the saturation pressure
    ss = HKFT(na, T=473.15, P=100e5)
    sat = HKFT(na, T=473.15, P=ss.water.psat(473.15))
    assert np.isclose(ss.gibbs_RT_ref(), sat.gibbs_RT())
    assert np.isclose(ss.molar_volume_ref(), sat.molar_volume())


def test_one_solvent_update_per_state_change(na):
    w = CountingWater()
    ss = HKFT(na, water=w)
    n = w.n_set_state
    ss.set_state_TP(423.15, 50e5)
    assert w.n_set_state == n + 1
    values = [ss.gibbs_mole(), ss.enthalpy_mole(), ss.entropy_mole(), ss.cp_mole(),
              ss.cv_mole(), ss.molar_volume(), ss.density(), ss.gibbs_RT_ref(),
              ss.cp_R_ref(), ss.molar_volume_ref(), ss.g(423.15, 50e5), ss.gstar(423.15, 50e5, 1)]
    assert w.n_set_state == n + 1, "accessors do not change the solvent state"
    again = [ss.gibbs_mole(), ss.enthalpy_mole(), ss.entropy_mole(), ss.cp_mole(),
             ss.cv_mole(), ss.molar_volume(), ss.density(), ss.gibbs_RT_ref(),
             ss.cp_R_ref(), ss.molar_volume_ref(), ss.g(423.15, 50e5), ss.gstar(423.15, 50e5, 1)]
    assert values == again


def test_shared_solvent_keeps_snapshots(na, cl_row):
    w = WaterIF97()
    na_ss = HKFT(na, water=w, T=373.15, P=10e5)
    cl_ss = standard_state(cl_row, water=w, T=373.15, P=10e5)
    G = na_ss.gibbs_mole()
    cl_ss.set_state_TP(473.15, 100e5)
    assert w.state.T == 473.15
    assert na_ss.gibbs_mole() == G, "evaluator keeps its own snapshot of the solvent"
    assert na_ss.water_state.T == 373.15


def test_duplicate_is_independent(na):
    ss = HKFT(na, T=373.15, P=10e5)
    G = ss.gibbs_mole()
    copy = ss.duplicate()
    assert copy.water is not ss.water
    copy.set_state_TP(473.15, 100e5)
    assert ss.temperature() == 373.15
    assert ss.water.state.T == 373.15
    assert ss.gibbs_mole() == G
    assert copy.parameters is ss.parameters


def test_duplicate_with_shared_solvent(na):
    ss = HKFT(na, T=373.15, P=10e5)
    copy = ss.duplicate(share_solvent=True)
    assert copy.water is ss.water
    assert copy.gibbs_mole() == ss.gibbs_mole()


def test_neutral_species_has_constant_omega(co2_row):
    ss = standard_state(co2_row, T=523.15, P=100e5)
    assert ss._omega["omega"] == ss.parameters.omega
    assert ss._omega["dwdT"] == 0 and ss._omega["dwdP"] == 0


def test_proton_properties_are_zero():
    ss = HKFT(_proton(), T=473.15, P=100e5)
    assert abs(ss.gibbs_mole()) < 1e-6
    assert abs(ss.entropy_mole()) < 1e-9
    assert abs(ss.cp_mole()) < 1e-9
    assert abs(ss.molar_volume()) < 1e-15


def test_correlation_functions(na):
    ss = HKFT(na, T=473.15, P=20e5)
    T, P = 473.15, 20e5
    assert ss.ag(T) == pytest.approx(-2.037662 + 5.747e-3 * 200 - 6.557892e-6 * 200 ** 2)
    assert ss.bg(T, 3) == 0
    assert ss.gstar(T, P) == pytest.approx(ss.g(T, P) - ss.f(T, P))
    assert ss.gstar(T, P, 1) == pytest.approx(ss.g(T, P, 1) - ss.f(T, P, 1))
    assert ss.f(520.0, P) == 0
    with pytest.raises(ValueError):
        ss.g(T, P, 5)


def test_state_setters(na):
    ss = HKFT(na)
    ss.set_temperature(350.0)
    assert ss.temperature() == 350.0 and ss.pressure() == Pr_Pa
    ss.set_pressure(20e5)
    assert ss.temperature() == 350.0 and ss.pressure() == 20e5
    assert ss.ref_pressure() == Pr_Pa


def test_standard_state_interface(na, na_row):
    ss = standard_state(na)
    assert isinstance(ss, StandardState)
    assert isinstance(standard_state(na_row), HKFT)
    assert np.isclose(ss.gibbs_mole(), standard_state(na_row).gibbs_mole())


def test_standard_state_unknown_model(na_row):
    with pytest.raises(EOSParameterError):
        standard_state(dict(na_row, model="Berman"))


def test_critical_properties(na):
    ss = HKFT(na)
    assert ss.crit_temperature() == 647.096
    assert np.isclose(ss.crit_pressure(), 22.064e6)
    assert ss.crit_density() == 322.0


def test_failed_state_change_keeps_previous_state(na):
    ss = HKFT(na, T=373.15, P=10e5)
    G = ss.gibbs_mole()
    snapshot = ss.water_state
    # 10 bar is below the saturation pressure at 200 C
    with pytest.raises(WaterModelError):
        ss.set_temperature(473.15)
    assert ss.temperature() == 373.15 and ss.pressure() == 10e5
    assert ss.water_state is snapshot
    assert ss.water_state.T == 373.15
    assert ss.gibbs_mole() == G
    ss.set_pressure(20e5)
    assert ss.temperature() == 373.15 and ss.pressure() == 20e5


def test_ref_state_pressure(na):
    ss = HKFT(na)
    assert ss.ref_state_pressure() == Pr_Pa
    ss.set_state_TP(473.15, 20e5)
    Psat = ss.ref_state_pressure()
    assert ss.ref_pressure() == Pr_Pa
    assert np.isclose(Psat, 15.55e5, rtol=2e-3), f"Psat(200 C) = {Psat} Pa"
    assert Psat == pytest.approx(ss.water.psat(473.15))
