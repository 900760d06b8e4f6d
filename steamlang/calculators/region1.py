"""
IAPWS-IF97 Region 1: Compressed (subcooled) liquid water.

Valid range:
    273.15 K <= T <= 623.15 K
    p_sat(T) <= p <= 100 MPa

Basic equation (dimensionless Gibbs free energy):

    gamma(pi, tau) = sum( n_i * (7.1 - pi)^I_i * (tau - 1.222)^J_i )

    pi = p / 16.53 MPa,  tau = 1386 K / T

Properties:
    v  = R * T * pi * gamma_pi / p
    h  = R * T * tau * gamma_tau
    s  = R * (tau * gamma_tau - gamma)
    cp = -R * tau^2 * gamma_tautau

Units: pressure in MPa, temperature in K, results in kJ/kg, kJ/kg-K, m3/kg.

Reference:
    IAPWS R7-97(2012), Revised Release on the IAPWS Industrial Formulation
    1997 for the Thermodynamic Properties of Water and Steam, Table 2.
"""

from functools import partial
from typing import Optional, Union

from steamlang.calculators import polynomial
from steamlang.calculators.inversion import InversionResult, invert_property
from steamlang.calculators.polynomial import CoefficientTable
from steamlang.calculators.region_calculator import (
    SPECIFIC_GAS_CONSTANT,
    RegionCalculator,
    validate_state,
)
from steamlang.config import SolverSettings

# Region 1 coefficients (Table 2 of IAPWS-IF97)
# Each row: (I_i, J_i, n_i)
REGION1_TABLE = CoefficientTable.from_rows([
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
])


class Region1Calculator(RegionCalculator):
    """
    Property calculator for compressed liquid water.

    Example:
        >>> Region1Calculator.calculate_specific_enthalpy(3.0, 300.0)
        115.33127...
    """

    REFERENCE_PRESSURE_MPA = 16.53
    REFERENCE_TEMPERATURE_K = 1386.0
    PI_OFFSET = 7.1
    TAU_OFFSET = 1.222
    INVERSION_SEED_K = 300.0
    # Inversion iterate is clamped to the region temperature range
    INVERSION_MIN_K = 273.15
    INVERSION_MAX_K = 623.15

    @classmethod
    def _reduced(cls, pressure_mpa: float, temperature_k: float):
        validate_state(pressure_mpa, temperature_k)
        pi = pressure_mpa / cls.REFERENCE_PRESSURE_MPA
        tau = cls.REFERENCE_TEMPERATURE_K / temperature_k
        return pi, tau, cls.PI_OFFSET - pi, tau - cls.TAU_OFFSET

    @classmethod
    def calculate_specific_enthalpy(cls, pressure_mpa: float, temperature_k: float) -> float:
        """Specific enthalpy [kJ/kg]."""
        _, tau, a, b = cls._reduced(pressure_mpa, temperature_k)
        gamma_tau = polynomial.derivative_b(REGION1_TABLE, a, b)
        return SPECIFIC_GAS_CONSTANT * temperature_k * tau * gamma_tau

    @classmethod
    def calculate_specific_entropy(cls, pressure_mpa: float, temperature_k: float) -> float:
        """Specific entropy [kJ/kg-K]."""
        _, tau, a, b = cls._reduced(pressure_mpa, temperature_k)
        gamma = polynomial.evaluate(REGION1_TABLE, a, b)
        gamma_tau = polynomial.derivative_b(REGION1_TABLE, a, b)
        return SPECIFIC_GAS_CONSTANT * (tau * gamma_tau - gamma)

    @classmethod
    def calculate_specific_volume(cls, pressure_mpa: float, temperature_k: float) -> float:
        """Specific volume [m3/kg]."""
        pi, _, a, b = cls._reduced(pressure_mpa, temperature_k)
        # d/dpi of (7.1 - pi)^I carries a factor of -1
        gamma_pi = -polynomial.derivative_a(REGION1_TABLE, a, b)
        return SPECIFIC_GAS_CONSTANT * temperature_k / (pressure_mpa * 1000.0) * pi * gamma_pi

    @classmethod
    def calculate_density(cls, pressure_mpa: float, temperature_k: float) -> float:
        """Density [kg/m3]."""
        return 1.0 / cls.calculate_specific_volume(pressure_mpa, temperature_k)

    @classmethod
    def calculate_specific_heat_cp(cls, pressure_mpa: float, temperature_k: float) -> float:
        """Isobaric specific heat capacity [kJ/kg-K]."""
        _, tau, a, b = cls._reduced(pressure_mpa, temperature_k)
        gamma_tautau = polynomial.second_derivative_bb(REGION1_TABLE, a, b)
        return -SPECIFIC_GAS_CONSTANT * tau * tau * gamma_tautau

    @classmethod
    def invert_temperature_from_enthalpy(
        cls,
        pressure_mpa: float,
        target_enthalpy: float,
        full_output: bool = False,
        settings: Optional[SolverSettings] = None,
    ) -> Union[float, InversionResult]:
        """Temperature [K] at which h(p, T) equals the target [kJ/kg]."""
        return invert_property(
            partial(cls.calculate_specific_enthalpy, pressure_mpa),
            target_enthalpy,
            cls.INVERSION_SEED_K,
            full_output=full_output,
            settings=settings,
            lower=cls.INVERSION_MIN_K,
            upper=cls.INVERSION_MAX_K,
        )

    @classmethod
    def invert_temperature_from_entropy(
        cls,
        pressure_mpa: float,
        target_entropy: float,
        full_output: bool = False,
        settings: Optional[SolverSettings] = None,
    ) -> Union[float, InversionResult]:
        """Temperature [K] at which s(p, T) equals the target [kJ/kg-K]."""
        return invert_property(
            partial(cls.calculate_specific_entropy, pressure_mpa),
            target_entropy,
            cls.INVERSION_SEED_K,
            full_output=full_output,
            settings=settings,
            lower=cls.INVERSION_MIN_K,
            upper=cls.INVERSION_MAX_K,
        )

    @classmethod
    def invert_temperature_from_density(
        cls,
        pressure_mpa: float,
        target_density: float,
        full_output: bool = False,
        settings: Optional[SolverSettings] = None,
    ) -> Union[float, InversionResult]:
        """Temperature [K] at which rho(p, T) equals the target [kg/m3]."""
        return invert_property(
            partial(cls.calculate_density, pressure_mpa),
            target_density,
            cls.INVERSION_SEED_K,
            full_output=full_output,
            settings=settings,
            lower=cls.INVERSION_MIN_K,
            upper=cls.INVERSION_MAX_K,
        )
