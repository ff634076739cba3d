"""
Johnson & Norton (1991) dielectric constant correlation for water.

This is the correlation used by SUPCRT92 (subroutine epsBrn in H2O92D.f).
Besides the dielectric constant it returns the partial derivatives with
respect to temperature at constant density and with respect to density at
constant temperature, which the solvent provider combines with the
derivatives of the density to get the Born functions.

Reference:
Johnson, J. W. and Norton, D. (1991) Critical phenomena in hydrothermal
systems: state, thermodynamic, electrostatic, and transport properties of
H2O in the critical region. American Journal of Science, 291, 541-648.
"""

import numpy as np
from typing import Union, Dict

# Table coefficients a1..a10
_A = [
    0.1470333593E+02, 0.2128462733E+03, -0.1154445173E+03,
    0.1955210915E+02, -0.8330347980E+02, 0.3213240048E+02,
    -0.6694098645E+01, -0.3786202045E+02, 0.6887359646E+02,
    -0.2729401652E+02,
]

# reference temperature for the reduced temperature (K)
T_REF = 298.15


def _k_coefficients(That):
    """
    Temperature-dependent coefficients k0..k4 and their first and second
    derivatives with respect to the reduced temperature.
    """
    a1, a2, a3, a4, a5, a6, a7, a8, a9, a10 = _A
    t = That

    k = [
        1.0,
        a1 / t,
        a2 / t + a3 + a4 * t,
        a5 / t + a6 * t + a7 * t ** 2,
        a8 / t ** 2 + a9 / t + a10,
    ]
    dk = [
        0.0,
        -a1 / t ** 2,
        -a2 / t ** 2 + a4,
        -a5 / t ** 2 + a6 + 2 * a7 * t,
        -2 * a8 / t ** 3 - a9 / t ** 2,
    ]
    d2k = [
        0.0,
        2 * a1 / t ** 3,
        2 * a2 / t ** 3,
        2 * a5 / t ** 3 + 2 * a7,
        6 * a8 / t ** 4 + 2 * a9 / t ** 3,
    ]
    return k, dk, d2k


def epsilon_JN91(T: Union[float, np.ndarray],
                 rho: Union[float, np.ndarray]) -> Dict[str, Union[float, np.ndarray]]:
    """
    Calculate the dielectric constant of water and its partial derivatives.

    epsilon = sum_{i=0}^{4} k_i(That) * rhohat^i, with That = T / 298.15 and
    rhohat the density in g/cm3.

    Parameters
    ----------
    T : float or array
        Temperature in Kelvin
    rho : float or array
        Density in kg/m3

    Returns
    -------
    dict
        epsilon and its partial derivatives:
        - 'dedT', 'd2edT2': with respect to T (K) at constant density
        - 'dedD', 'd2edD2': with respect to rhohat (g/cm3) at constant T
        - 'd2edTdD': mixed derivative

    Examples
    --------
    >>> eps = epsilon_JN91(298.15, 997.05)["epsilon"]
    >>> round(float(eps))
    78
    """
    T = np.asarray(T, dtype=float)
    D = np.asarray(rho, dtype=float) / 1000
    k, dk, d2k = _k_coefficients(T / T_REF)

    epsilon = sum(k[i] * D ** i for i in range(5))
    dedT = sum(dk[i] * D ** i for i in range(1, 5)) / T_REF
    d2edT2 = sum(d2k[i] * D ** i for i in range(1, 5)) / T_REF ** 2
    dedD = sum(i * k[i] * D ** (i - 1) for i in range(1, 5))
    d2edD2 = sum(i * (i - 1) * k[i] * D ** (i - 2) for i in range(2, 5))
    d2edTdD = sum(i * dk[i] * D ** (i - 1) for i in range(1, 5)) / T_REF

    return {"epsilon": epsilon, "dedT": dedT, "d2edT2": d2edT2,
            "dedD": dedD, "d2edD2": d2edD2, "d2edTdD": d2edTdD}
