"""
Dimensionless polynomial evaluator shared by the IAPWS-IF97 regions.

Every basic equation in IF97 is a sum of terms

    n_k * a^I_k * b^J_k

over a fixed coefficient table, where the bases (a, b) are region-specific
functions of the reduced pressure pi and reduced temperature tau:

    Region 1:            a = 7.1 - pi,  b = tau - 1.222
    Region 2 residual:   a = pi,        b = tau - 0.5
    Region 5 residual:   a = pi,        b = tau
    Ideal-gas parts:     I_k = 0,       b = tau

Derivatives are taken term-by-term with the power rule. Terms whose
exponent vanishes are skipped in the corresponding derivative so that a
zero base never meets a negative power.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple


@dataclass(frozen=True)
class CoefficientTable:
    """
    Published IAPWS coefficient table.

    Attributes:
        I: Exponents of the first base
        J: Exponents of the second base
        n: Coefficients
    """
    I: Tuple[int, ...]
    J: Tuple[int, ...]
    n: Tuple[float, ...]

    def __post_init__(self):
        if not (len(self.I) == len(self.J) == len(self.n)):
            raise ValueError(
                f"Coefficient table arrays differ in length: "
                f"I={len(self.I)}, J={len(self.J)}, n={len(self.n)}"
            )

    @classmethod
    def from_rows(cls, rows: Iterable[Tuple[int, int, float]]) -> "CoefficientTable":
        """Build a table from (I, J, n) rows as printed in the IF97 release."""
        rows = tuple(rows)
        return cls(
            I=tuple(row[0] for row in rows),
            J=tuple(row[1] for row in rows),
            n=tuple(float(row[2]) for row in rows),
        )

    def __len__(self) -> int:
        return len(self.n)

    def terms(self):
        """Iterate over (I, J, n) triples."""
        return zip(self.I, self.J, self.n)


def evaluate(table: CoefficientTable, a: float, b: float) -> float:
    """Sum of n * a^I * b^J."""
    return sum(n * a ** i * b ** j for i, j, n in table.terms())


def derivative_a(table: CoefficientTable, a: float, b: float) -> float:
    """First partial derivative with respect to the first base."""
    return sum(n * i * a ** (i - 1) * b ** j for i, j, n in table.terms() if i != 0)


def derivative_b(table: CoefficientTable, a: float, b: float) -> float:
    """First partial derivative with respect to the second base."""
    return sum(n * a ** i * j * b ** (j - 1) for i, j, n in table.terms() if j != 0)


def second_derivative_aa(table: CoefficientTable, a: float, b: float) -> float:
    """Second partial derivative with respect to the first base."""
    return sum(
        n * i * (i - 1) * a ** (i - 2) * b ** j
        for i, j, n in table.terms()
        if i not in (0, 1)
    )


def second_derivative_bb(table: CoefficientTable, a: float, b: float) -> float:
    """Second partial derivative with respect to the second base."""
    return sum(
        n * a ** i * j * (j - 1) * b ** (j - 2)
        for i, j, n in table.terms()
        if j not in (0, 1)
    )


def second_derivative_ab(table: CoefficientTable, a: float, b: float) -> float:
    """Mixed second partial derivative."""
    return sum(
        n * i * a ** (i - 1) * j * b ** (j - 1)
        for i, j, n in table.terms()
        if i != 0 and j != 0
    )
