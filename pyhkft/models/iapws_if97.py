"""
IAPWS-IF97 Region 1 (compressed liquid water) and Region 4 (saturation line).

Provides the specific volume of liquid water and its first and second
partial derivatives with respect to temperature and pressure, computed from
analytic derivatives of the dimensionless Gibbs free energy, and the
saturation pressure.

Valid range (Region 1):
    273.15 K <= T <= 623.15 K
    P_sat(T) <= P <= 100 MPa

Reference:
    Wagner, W. et al. (2000). "The IAPWS Industrial Formulation 1997
    for the Thermodynamic Properties of Water and Steam."
    ASME J. Eng. Gas Turbines Power, 122(1), 150-182.

Units: T in K, P in MPa, v in m3/kg
"""

import math

# Constants
R_SPECIFIC = 461.526e-6  # Specific gas constant for water [MPa*m3/(kg*K)]
P_STAR = 16.53           # Reference pressure [MPa]
T_STAR = 1386.0          # Reference temperature [K]

# Critical point (IAPWS)
T_CRIT = 647.096         # K
P_CRIT = 22.064          # MPa
RHO_CRIT = 322.0         # kg/m3

# Region 1 coefficients (Table 2 of IAPWS-IF97)
# Each row: (I_i, J_i, n_i)
_REGION1_IJN = [
    (0,  -2,   0.14632971213167e+00),
    (0,  -1,  -0.84548187389013e+00),
    (0,   0,  -0.37563603672040e+01),
    (0,   1,   0.33855169168385e+01),
    (0,   2,  -0.95791963387872e+00),
    (0,   3,   0.15772038513228e+00),
    (0,   4,  -0.16616417199501e-01),
    (0,   5,   0.81214629983568e-03),
    (1,  -9,   0.28319080123804e-03),
    (1,  -7,  -0.60706301565874e-03),
    (1,  -1,  -0.18990068218419e-01),
    (1,   0,  -0.32529748770505e-01),
    (1,   1,  -0.21841717175414e-01),
    (1,   3,  -0.52838357969930e-04),
    (2,  -3,  -0.47184321073267e-03),
    (2,   0,  -0.30001780793026e-03),
    (2,   1,   0.47661393906987e-04),
    (2,   3,  -0.44141845330846e-05),
    (2,  17,  -0.72694996297594e-15),
    (3,  -4,  -0.31679644845054e-04),
    (3,   0,  -0.28270797985312e-05),
    (3,   6,  -0.85205128120103e-09),
    (4,  -5,  -0.22425281908000e-05),
    (4,  -2,  -0.65171222895601e-06),
    (4,  10,  -0.14341729937924e-12),
    (5,  -8,  -0.40516996860117e-06),
    (8, -11,  -0.12734301741682e-08),
    (8,  -6,  -0.17424871230634e-09),
    (21, -29, -0.68762131295531e-18),
    (23, -31,  0.14478307828521e-19),
    (29, -38,  0.26335781662795e-22),
    (30, -39, -0.11947622640071e-22),
    (31, -40,  0.18228094581404e-23),
    (32, -41, -0.93537087292458e-25),
]

# Region 4 coefficients (Table 34 of IAPWS-IF97)
_REGION4_N = [
    0.11670521452767e+04, -0.72421316703206e+06, -0.17073846940092e+02,
    0.12020824702470e+05, -0.32325550322333e+07,  0.14915108613530e+02,
    -0.48232657361591e+04, 0.40511340542057e+06, -0.23855557567849e+00,
    0.65017534844798e+03,
]


def _gamma_derivatives(pi, tau):
    """
    Compute the pressure derivatives of gamma for Region 1, up to third order
    in pi and second order in tau.

    gamma = sum( n_i * (7.1 - pi)^I_i * (tau - 1.222)^J_i )

    Returns:
        dict with keys gp, gpp, gppp, gpt, gppt, gptt
    """
    a = 7.1 - pi
    b = tau - 1.222

    gp = gpp = gppp = 0.0
    gpt = gppt = gptt = 0.0

    for I, J, n in _REGION1_IJN:
        if I == 0:
            continue
        bJ = b ** J
        aI1 = a ** (I - 1)
        # d/dpi brings down -I (7.1 - pi)^(I-1)
        gp += -n * I * aI1 * bJ
        gpt += -n * I * aI1 * J * bJ / b
        gptt += -n * I * aI1 * J * (J - 1) * bJ / b ** 2
        if I >= 2:
            aI2 = aI1 / a
            gpp += n * I * (I - 1) * aI2 * bJ
            gppt += n * I * (I - 1) * aI2 * J * bJ / b
            if I >= 3:
                gppp += -n * I * (I - 1) * (I - 2) * (aI2 / a) * bJ

    return {"gp": gp, "gpp": gpp, "gppp": gppp,
            "gpt": gpt, "gppt": gppt, "gptt": gptt}


def region1_volume(T, P):
    """
    Specific volume of liquid water from IAPWS-IF97 Region 1 with its partial
    derivatives.

    Parameters:
        T: temperature in K (273.15 - 623.15)
        P: pressure in MPa (up to 100)

    Returns:
        dict with v [m3/kg] and v_T, v_TT, v_P, v_PP, v_TP
        (derivatives per K and per MPa)
    """
    pi = P / P_STAR
    tau = T_STAR / T
    gd = _gamma_derivatives(pi, tau)

    v = R_SPECIFIC * T * gd["gp"] / P_STAR
    # dtau/dT = -tau/T
    v_T = R_SPECIFIC * (gd["gp"] - tau * gd["gpt"]) / P_STAR
    v_TT = R_SPECIFIC * tau ** 2 * gd["gptt"] / (T * P_STAR)
    v_P = R_SPECIFIC * T * gd["gpp"] / P_STAR ** 2
    v_PP = R_SPECIFIC * T * gd["gppp"] / P_STAR ** 3
    v_TP = R_SPECIFIC * (gd["gpp"] - tau * gd["gppt"]) / P_STAR ** 2

    return {"v": v, "v_T": v_T, "v_TT": v_TT, "v_P": v_P, "v_PP": v_PP, "v_TP": v_TP}


def psat_if97(T):
    """
    Saturation pressure of water from IAPWS-IF97 Region 4.

    Parameters:
        T: temperature in K (273.15 - 647.096)

    Returns:
        saturation pressure in MPa
    """
    n = _REGION4_N
    theta = T + n[8] / (T - n[9])
    A = theta ** 2 + n[0] * theta + n[1]
    B = n[2] * theta ** 2 + n[3] * theta + n[4]
    C = n[5] * theta ** 2 + n[6] * theta + n[7]
    return (2 * C / (-B + math.sqrt(B ** 2 - 4 * A * C))) ** 4
