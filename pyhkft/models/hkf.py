"""
HKF (Helgeson-Kirkham-Flowers) electrostatic correlation functions.

This module implements the solvent function g, its high-temperature low-pressure
correction f, and the Born coefficient omega(T, P) derived from them, which
the revised HKF equations of state use for charged aqueous species.

References:
- Shock, E.L. et al. (1992). Calculation of the thermodynamic properties of
  aqueous species at high pressures and temperatures: effective electrostatic
  radii, dissociation constants and standard partial molal properties to
  1000 degrees C and 5 kbar. J. Chem. Soc. Faraday Trans., 88(6), 803-826.
- Johnson, J.W. et al. (1992). SUPCRT92: A software package for calculating the
  standard molal thermodynamic properties of minerals, gases, aqueous species,
  and reactions from 1 to 5000 bar and 0 to 1000 degrees C.
  Computers & Geosciences, 18(7), 899-947.
"""

import numpy as np

# reference temperature (K) and pressure (bar, 1 atm)
Tr = 298.15
Pr = 1.01325
# solvent parameters of the revised HKF equations
Theta = 228   # K
Psi = 2600    # bar
# eta in Eq. 1 of Shock et al. (1992), Angstrom cal mol-1
eta = 1.66027E5
# electrostatic radius of H+ (Angstrom)
r_H = 3.082

# g is evaluated at this density (g/cm3) when water is less dense
RHO_G_MIN = 0.35
# window of the f function (region II of Fig. 6 of Shock et al., 1992)
F_TC_MIN = 155.0   # degrees C
F_P_MAX = 1000.0   # bar
F_T_MAX = 500.0    # K

# Table 3 of Shock et al. (1992)
ag1 = -2.037662
ag2 = 5.747000E-3
ag3 = -6.557892E-6
bg1 = 6.107361
bg2 = -1.074377E-2
bg3 = 1.268348E-5

# Table 4 of Shock et al. (1992)
af1 = 0.3666666E2
af2 = -0.1504956E-9
af3 = 0.5017997E-13


def convert_cm3bar(value):
    # cal bar-1 to cm3
    return value * 4.184 * 10


def _as_arrays(*args):
    arrays = np.broadcast_arrays(*[np.asarray(x, dtype=float) for x in args])
    shape = arrays[0].shape
    return shape, [np.array(a).reshape(-1) for a in arrays]


def ag(T, ifunc=0):
    """
    Coefficient ag of the g function (Eq. 25) and its temperature derivatives.

    Parameters
    ----------
    T : float or array
        Temperature in K
    ifunc : int
        0 value, 1 first T derivative, 2 second T derivative, 3 P derivative
    """
    Tc = np.asarray(T, dtype=float) - 273.15
    if ifunc == 0:
        return ag1 + ag2 * Tc + ag3 * Tc ** 2
    if ifunc == 1:
        return ag2 + 2 * ag3 * Tc
    if ifunc == 2:
        return np.full_like(Tc, 2 * ag3)
    if ifunc == 3:
        return np.zeros_like(Tc)
    raise ValueError(f"ifunc must be 0, 1, 2 or 3, got {ifunc}")


def bg(T, ifunc=0):
    """
    Coefficient bg of the g function (Eq. 26) and its temperature derivatives.

    Parameters
    ----------
    T : float or array
        Temperature in K
    ifunc : int
        0 value, 1 first T derivative, 2 second T derivative, 3 P derivative
    """
    Tc = np.asarray(T, dtype=float) - 273.15
    if ifunc == 0:
        return bg1 + bg2 * Tc + bg3 * Tc ** 2
    if ifunc == 1:
        return bg2 + 2 * bg3 * Tc
    if ifunc == 2:
        return np.full_like(Tc, 2 * bg3)
    if ifunc == 3:
        return np.zeros_like(Tc)
    raise ValueError(f"ifunc must be 0, 1, 2 or 3, got {ifunc}")


def gfun(rhohat, T, alpha, daldT, beta):
    """
    g function of Shock et al. (1992) and its partial derivatives.

    g = ag * (1 - rhohat)**bg (Eq. 24), zero where rhohat >= 1. Where the
    density of water is below RHO_G_MIN the correlation is evaluated at
    RHO_G_MIN; the expansivity and compressibility of water at the actual
    state still enter the derivatives, so every output is continuous across
    the threshold. Below it the derivatives are not those of the clamped
    value of g, so identities such as Cp = T dS/dT or V = dG/dP hold only
    approximately there.

    Parameters
    ----------
    rhohat : float or array
        Density of water in g/cm3
    T : float or array
        Temperature in K
    alpha : float or array
        Coefficient of isobaric expansivity of water (K-1)
    daldT : float or array
        Temperature derivative of alpha (K-2)
    beta : float or array
        Coefficient of isothermal compressibility of water (bar-1)

    Returns
    -------
    dict
        g (Angstrom) and dgdT, d2gdT2, dgdP
    """
    shape, (rhohat, T, alpha, daldT, beta) = _as_arrays(rhohat, T, alpha, daldT, beta)

    g = np.zeros(rhohat.shape)
    dgdT = np.zeros(rhohat.shape)
    d2gdT2 = np.zeros(rhohat.shape)
    dgdP = np.zeros(rhohat.shape)

    # only rhohat less than 1 will give results other than zero
    mask = rhohat < 1
    if np.any(mask):
        rho_m = rhohat[mask]
        T_m = T[mask]
        alpha_m = alpha[mask]
        daldT_m = daldT[mask]
        beta_m = beta[mask]

        D = np.maximum(rho_m, RHO_G_MIN)
        a, dadT, d2adT2 = ag(T_m), ag(T_m, 1), ag(T_m, 2)
        b, dbdT, d2bdT2 = bg(T_m), bg(T_m, 1), bg(T_m, 2)
        u = 1 - D
        log_u = np.log(u)
        Db = u ** b

        # partial derivatives at constant density (Eqs. 67-73 of Johnson et al., 1992)
        G = a * Db
        G_T = (dadT + a * dbdT * log_u) * Db
        G_TT = (d2adT2 + 2 * dadT * dbdT * log_u + a * (d2bdT2 * log_u + (dbdT * log_u) ** 2)) * Db
        G_D = -a * b * u ** (b - 1)
        G_DD = a * b * (b - 1) * u ** (b - 2)
        G_TD = -u ** (b - 1) * (dadT * b + a * dbdT * (b * log_u + 1))

        # derivatives of the density of water
        dDdT = -rho_m * alpha_m
        dDdTT = -rho_m * (daldT_m - alpha_m ** 2)
        dDdP = rho_m * beta_m

        g[mask] = G
        dgdT[mask] = G_T + G_D * dDdT
        d2gdT2[mask] = G_TT + 2 * G_TD * dDdT + G_DD * dDdT ** 2 + G_D * dDdTT
        dgdP[mask] = G_D * dDdP

    return {"g": g.reshape(shape), "dgdT": dgdT.reshape(shape),
            "d2gdT2": d2gdT2.reshape(shape), "dgdP": dgdP.reshape(shape)}


def ffun(T, P):
    """
    f function of Shock et al. (1992) (Eq. 33) and its partial derivatives.

    f is nonzero only at 155 degrees C < T <= 500 K and P < 1000 bar; outside
    that window f and all of its derivatives are exactly zero.

    Parameters
    ----------
    T : float or array
        Temperature in K
    P : float or array
        Pressure in bar

    Returns
    -------
    dict
        f (Angstrom) and dfdT, d2fdT2, dfdP
    """
    shape, (T, P) = _as_arrays(T, P)

    f = np.zeros(T.shape)
    dfdT = np.zeros(T.shape)
    d2fdT2 = np.zeros(T.shape)
    dfdP = np.zeros(T.shape)

    Tc = T - 273.15
    ifg = (Tc > F_TC_MIN) & (P < F_P_MAX) & (T <= F_T_MAX)
    if np.any(ifg):
        x = (Tc[ifg] - F_TC_MIN) / 300
        dP = F_P_MAX - P[ifg]
        fT = x ** 4.8 + af1 * x ** 16
        fP = af2 * dP ** 3 + af3 * dP ** 4
        f[ifg] = fT * fP
        # Eqn. 75
        dfdT[ifg] = (0.016 * x ** 3.8 + 16 * af1 / 300 * x ** 15) * fP
        # Eqn. 76
        d2fdT2[ifg] = (0.0608 / 300 * x ** 2.8 + af1 / 375 * x ** 14) * fP
        # Eqn. 74
        dfdP[ifg] = -fT * (3 * af2 * dP ** 2 + 4 * af3 * dP ** 3)

    return {"f": f.reshape(shape), "dfdT": dfdT.reshape(shape),
            "d2fdT2": d2fdT2.reshape(shape), "dfdP": dfdP.reshape(shape)}


def gstar(rhohat, T, P, alpha, daldT, beta):
    """
    Solvent function with the f correction applied, g - f (Eq. 32).

    Returns
    -------
    dict
        with the same keys as gfun()
    """
    g = gfun(rhohat, T, alpha, daldT, beta)
    f = ffun(T, P)
    return {"g": g["g"] - f["f"], "dgdT": g["dgdT"] - f["dfdT"],
            "d2gdT2": g["d2gdT2"] - f["d2fdT2"], "dgdP": g["dgdP"] - f["dfdP"]}


def radius_from_omega(omega, z):
    """Conventional electrostatic radius (Angstrom) at Tr, Pr from omega (cal mol-1)."""
    return z ** 2 / (omega / eta + z / r_H)


def omega_from_radius(radius, z):
    """Born coefficient (cal mol-1) at Tr, Pr from the electrostatic radius (Angstrom)."""
    return eta * (z ** 2 / radius - z / r_H)


def born_omega(omega, z, g):
    """
    Born coefficient at T, P and its partial derivatives.

    After SUPCRT92/reac92.f. For neutral species omega is constant.

    Parameters
    ----------
    omega : float
        Born coefficient at Tr, Pr (cal mol-1)
    z : float
        Charge
    g : dict
        Output of gstar() at T, P

    Returns
    -------
    dict
        omega, dwdT, d2wdT2, dwdP
    """
    gg = np.asarray(g["g"], dtype=float)
    if z == 0:
        zeros = np.zeros_like(gg)
        return {"omega": np.full_like(gg, omega), "dwdT": zeros,
                "d2wdT2": zeros, "dwdP": zeros}

    reref = radius_from_omega(omega, z)
    re = reref + abs(z) * gg
    omega_PT = eta * (z ** 2 / re - z / (r_H + gg))
    Z3 = abs(z ** 3) / re ** 2 - z / (r_H + gg) ** 2
    Z4 = abs(z ** 4) / re ** 3 - z / (r_H + gg) ** 3
    dwdP = -eta * Z3 * g["dgdP"]
    dwdT = -eta * Z3 * g["dgdT"]
    d2wdT2 = 2 * eta * Z4 * g["dgdT"] ** 2 - eta * Z3 * g["d2gdT2"]
    return {"omega": omega_PT, "dwdT": dwdT, "d2wdT2": d2wdT2, "dwdP": dwdP}
