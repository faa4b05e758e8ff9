"""
common/regression.py - Regression Formula Primitives

Closed-form regression laws fitted offline against simulated and empirical
protein data, plus the ordered band tables that select between them.

Provides:
- PowerLaw:     a * x^b
- LogLaw:       a * ln(x) + b
- LinearLaw:    a * x + b
- Constant:     fixed value
- Identity:     x itself
- Offset:       primary - c (derived quantities such as K1 = K2 - c)
- BoundaryMean: mean of two regimes inside an ambiguous middle band
- Band / Piecewise: ordered (limit, formula) tables, first match wins
- round_half_away: C-compatible rounding for length-like outputs

Design Philosophy:
- DETERMINISTIC: Every formula is a frozen dataclass, evaluation is pure
- TABLE-DRIVEN: Regime selection is data, not nested if/else
- ROUND ONCE: Integer outputs are rounded after the band formula

Copyright 2023. Paul Martin Harrison.
Licensed under the 3-clause BSD license. See LICENSE bundled with this program.
Version: 1.0.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple, Union

__version__ = "1.0.0"
__author__ = "Paul Martin Harrison"
__license__ = "BSD-3-Clause"

Formula = Union["PowerLaw", "LogLaw", "LinearLaw", "Constant", "Identity", "Offset", "BoundaryMean"]

# Band labels
SHORT = "short"
LONG = "long"
BOUNDARY_MEAN = "boundary_mean"
SINGLE = "single"


def round_half_away(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Matches C round(); Python's round() uses banker's rounding.

    Examples:
        >>> round_half_away(2.5)
        3
        >>> round_half_away(-2.5)
        -3
    """
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# =============================================================================
# FORMULAS
# =============================================================================

@dataclass(frozen=True)
class PowerLaw:
    """a * x^b"""
    coefficient: float
    exponent: float

    def evaluate(self, length: float, primary: Optional[float] = None) -> float:
        return self.coefficient * math.pow(length, self.exponent)


@dataclass(frozen=True)
class LogLaw:
    """a * ln(x) + b"""
    slope: float
    intercept: float

    def evaluate(self, length: float, primary: Optional[float] = None) -> float:
        return self.slope * math.log(length) + self.intercept


@dataclass(frozen=True)
class LinearLaw:
    """a * x + b"""
    slope: float
    intercept: float

    def evaluate(self, length: float, primary: Optional[float] = None) -> float:
        return self.slope * length + self.intercept


@dataclass(frozen=True)
class Constant:
    value: float

    def evaluate(self, length: float, primary: Optional[float] = None) -> float:
        return self.value


@dataclass(frozen=True)
class Identity:
    """The target length itself."""

    def evaluate(self, length: float, primary: Optional[float] = None) -> float:
        return float(length)


@dataclass(frozen=True)
class Offset:
    """
    Quantity derived from an already computed primary value: primary - amount.

    Used for K1 = K2 - c (SEG) and m = M - c (fLPS).
    """
    amount: float

    def evaluate(self, length: float, primary: Optional[float] = None) -> float:
        if primary is None:
            raise ValueError("Offset formula requires the primary value")
        return primary - self.amount


@dataclass(frozen=True)
class BoundaryMean:
    """Arithmetic mean of two regimes evaluated at the same length."""
    lower: Formula
    upper: Formula

    def evaluate(self, length: float, primary: Optional[float] = None) -> float:
        return (self.lower.evaluate(length, primary) + self.upper.evaluate(length, primary)) / 2.0


# =============================================================================
# BAND TABLES
# =============================================================================

@dataclass(frozen=True)
class Band:
    """
    One entry of a piecewise table.

    Applies when length <= limit (inclusive) or length < limit (exclusive).
    A limit of math.inf is the catch-all final band.
    """
    limit: float
    formula: Formula
    label: str = SINGLE
    inclusive: bool = True

    def applies(self, length: float) -> bool:
        if self.inclusive:
            return length <= self.limit
        return length < self.limit


@dataclass(frozen=True)
class Piecewise:
    """Ordered band table; the first band whose limit admits the length wins."""
    bands: Tuple[Band, ...]
    rounded: bool = False

    def select(self, length: float) -> Band:
        for band in self.bands:
            if band.applies(length):
                return band
        raise ValueError(f"No regression band covers length {length}")

    def evaluate(self, length: float, primary: Optional[float] = None) -> Tuple[float, str]:
        """
        Evaluate the selected band.

        Returns:
            (value, band label); value is an int when the table is rounded
        """
        band = self.select(length)
        value = band.formula.evaluate(length, primary)
        if self.rounded:
            return round_half_away(value), band.label
        return value, band.label


def single(formula: Formula, rounded: bool = False) -> Piecewise:
    """Table with one regime for every length."""
    return Piecewise((Band(math.inf, formula),), rounded=rounded)


def two_regimes(
    breakpoint: float,
    short: Formula,
    long: Formula,
    rounded: bool = False,
) -> Piecewise:
    """short for x <= breakpoint, long above it."""
    return Piecewise(
        (
            Band(breakpoint, short, SHORT),
            Band(math.inf, long, LONG),
        ),
        rounded=rounded,
    )


def with_boundary_mean(
    lower_limit: float,
    upper_limit: float,
    short: Formula,
    long: Formula,
    rounded: bool = False,
    inclusive_upper: bool = True,
) -> Piecewise:
    """
    short for x <= lower_limit, the mean of both inside the middle band, long
    beyond upper_limit.

    inclusive_upper=False makes the middle band x < upper_limit, so that
    upper_limit itself already belongs to the long regime.
    """
    return Piecewise(
        (
            Band(lower_limit, short, SHORT),
            Band(upper_limit, BoundaryMean(short, long), BOUNDARY_MEAN, inclusive=inclusive_upper),
            Band(math.inf, long, LONG),
        ),
        rounded=rounded,
    )


__all__ = [
    "PowerLaw",
    "LogLaw",
    "LinearLaw",
    "Constant",
    "Identity",
    "Offset",
    "BoundaryMean",
    "Band",
    "Piecewise",
    "single",
    "two_regimes",
    "with_boundary_mean",
    "round_half_away",
    "SHORT",
    "LONG",
    "BOUNDARY_MEAN",
    "SINGLE",
]
