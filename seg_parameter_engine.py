#!/usr/bin/env python3
"""
seg_parameter_engine.py

SEG Parameter Engine for Low-Complexity Region Discovery

Recommends SEG window length L and complexity thresholds K1/K2 for a given
target length of low-complexity region, at five estimated protein coverage
levels (2%, 5%, 10%, 25%, 40%).

Design Philosophy:
- DETERMINISTIC: Same request always yields the same five rows
- TABLE-DRIVEN: Each coverage level is a frozen set of ordered band tables
- INDEPENDENT LEVELS: No state carried from one coverage level to the next
- FAIL-SOFT GATING: Out-of-bounds tuples become NA rows, never exceptions

Regression shape:
- L:  power law a * x^b, rounded half away from zero
- K2: log law a * ln(x) + b
- K1: K2 - c, c a coverage-specific constant (0 for NARROW focus)
- Between two regimes, the arithmetic mean of both formulas is used

Copyright 2023. Paul Martin Harrison.
Licensed under the 3-clause BSD license. See LICENSE bundled with this program.
Version: 1.0.0
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from common.constants import (
    COVERAGE_LEVELS,
    SEG_HIGH_COVERAGE_LEVEL,
    SEG_HIGH_COVERAGE_MIN_LENGTH,
    SEG_K2_MAX,
    TARGET_LENGTH_MIN,
)
from common.regression import (
    Identity,
    LogLaw,
    Offset,
    Piecewise,
    PowerLaw,
    single,
    two_regimes,
    with_boundary_mean,
)
from common.types import (
    AdvisorRequest,
    AlgorithmKind,
    CoverageResult,
    FilterParameters,
    Focus,
    InvalidReason,
    ValidityVerdict,
)

logger = logging.getLogger(__name__)

# Module metadata
__version__ = "1.0.0"
__author__ = "Paul Martin Harrison"
__license__ = "BSD-3-Clause"


@dataclass(frozen=True)
class SEGLevelSpec:
    """Regression tables and bounds for one (focus, coverage) combination."""
    coverage: int
    upper_bound: int
    window_length: Piecewise
    k2: Piecewise
    k1: Piecewise


# =============================================================================
# REGRESSION TABLES
# =============================================================================

def _narrow_level(coverage: int, upper_bound: int, short: LogLaw, long: LogLaw) -> SEGLevelSpec:
    # NARROW: L is the target length itself and K1 == K2
    return SEGLevelSpec(
        coverage=coverage,
        upper_bound=upper_bound,
        window_length=single(Identity(), rounded=True),
        k2=with_boundary_mean(45, 55, short, long),
        k1=single(Offset(0.0)),
    )


SEG_LEVEL_SPECS: Dict[Focus, Tuple[SEGLevelSpec, ...]] = {
    Focus.DIVERSE: (
        SEGLevelSpec(
            coverage=2,
            upper_bound=200,
            window_length=with_boundary_mean(
                35, 45, PowerLaw(1.274, 0.823), PowerLaw(1.004, 0.891), rounded=True
            ),
            k2=with_boundary_mean(35, 45, LogLaw(0.701, 0.155), LogLaw(0.447, 1.038)),
            k1=single(Offset(0.3)),
        ),
        SEGLevelSpec(
            coverage=5,
            upper_bound=300,
            window_length=two_regimes(50, PowerLaw(1.385, 0.801), PowerLaw(0.747, 0.912), rounded=True),
            k2=two_regimes(50, LogLaw(0.716, 0.381), LogLaw(0.337, 1.883)),
            k1=two_regimes(50, Offset(0.3), Offset(0.4)),
        ),
        SEGLevelSpec(
            coverage=10,
            upper_bound=300,
            window_length=with_boundary_mean(
                45, 55, PowerLaw(1.376, 0.799), PowerLaw(1.298, 0.809), rounded=True
            ),
            k2=with_boundary_mean(45, 55, LogLaw(0.69, 0.625), LogLaw(0.347, 1.93)),
            k1=single(Offset(0.3)),
        ),
        SEGLevelSpec(
            coverage=25,
            upper_bound=300,
            window_length=single(PowerLaw(1.507, 0.762), rounded=True),
            k2=with_boundary_mean(45, 55, LogLaw(0.476, 1.566), LogLaw(0.314, 2.221)),
            k1=single(Offset(0.3)),
        ),
        SEGLevelSpec(
            coverage=40,
            upper_bound=300,
            window_length=with_boundary_mean(
                55, 65, PowerLaw(1.491, 0.793), PowerLaw(1.138, 0.86), rounded=True
            ),
            k2=with_boundary_mean(55, 65, LogLaw(0.581, 1.316), LogLaw(0.28, 2.442)),
            k1=single(Offset(0.2)),
        ),
    ),
    Focus.NARROW: (
        _narrow_level(2, 250, LogLaw(0.818, -0.245), LogLaw(0.418, 1.206)),
        _narrow_level(5, 300, LogLaw(0.824, -0.003), LogLaw(0.355, 1.731)),
        _narrow_level(10, 300, LogLaw(0.803, 0.251), LogLaw(0.3, 2.135)),
        _narrow_level(25, 300, LogLaw(0.788, 0.499), LogLaw(0.278, 2.405)),
        _narrow_level(40, 250, LogLaw(0.705, 0.887), LogLaw(0.257, 2.596)),
    ),
}


# =============================================================================
# ENGINE
# =============================================================================

class SEGParameterEngine:
    """
    SEG Parameter Engine.

    Usage:
        engine = SEGParameterEngine()
        results = engine.advise(AdvisorRequest(target_length=15))
        for result in results:
            print(result.coverage, result.parameters)  # None when NA
    """

    VERSION = "1.0.0"
    ALGORITHM = AlgorithmKind.FILTER

    K2_MAX = SEG_K2_MAX
    HIGH_COVERAGE_LEVEL = SEG_HIGH_COVERAGE_LEVEL
    HIGH_COVERAGE_MIN_LENGTH = SEG_HIGH_COVERAGE_MIN_LENGTH

    def __init__(self, level_specs: Optional[Dict[Focus, Tuple[SEGLevelSpec, ...]]] = None):
        if level_specs is None:
            level_specs = SEG_LEVEL_SPECS
        self.level_specs = level_specs

    def advise(self, request: AdvisorRequest) -> List[CoverageResult]:
        """
        Compute one result per coverage level, in coverage order.

        Args:
            request: Target length and focus (algorithm must be FILTER)

        Returns:
            Five CoverageResult entries for coverage 2, 5, 10, 25, 40
        """
        if request.algorithm is not self.ALGORITHM:
            raise ValueError(
                f"SEGParameterEngine cannot advise for algorithm {request.algorithm.value}"
            )

        specs = self.level_specs[request.focus]
        results = [self.compute_level(request, spec) for spec in specs]

        coverages = tuple(result.coverage for result in results)
        if coverages != COVERAGE_LEVELS:
            raise ValueError(f"SEG level table out of order: {coverages}")
        return results

    def compute_level(self, request: AdvisorRequest, spec: SEGLevelSpec) -> CoverageResult:
        """Evaluate one coverage level's tables and gate the resulting tuple."""
        length = request.target_length

        window_length, window_regime = spec.window_length.evaluate(length)
        k2, k2_regime = spec.k2.evaluate(length)
        k1, k1_regime = spec.k1.evaluate(length, primary=k2)

        parameters = FilterParameters(window_length=window_length, k1=k1, k2=k2)
        verdict = self.check_validity(request, spec, parameters)

        result = CoverageResult(
            coverage=spec.coverage,
            computed=parameters,
            verdict=verdict,
            regimes={"window_length": window_regime, "k2": k2_regime, "k1": k1_regime},
        )
        logger.debug("SEG level %s%%: %s", spec.coverage, result.to_dict())
        return result

    def check_validity(
        self,
        request: AdvisorRequest,
        spec: SEGLevelSpec,
        parameters: FilterParameters,
    ) -> ValidityVerdict:
        """
        Gate a computed SEG tuple.

        Invalid when the target length is outside [5, upper_bound] or K2 > 4.2.
        Coverage 40% with DIVERSE focus also rejects lengths below 10, and only
        that case quotes the <10 bound in its NA message.
        """
        length = request.target_length
        reasons = []

        if length < TARGET_LENGTH_MIN or length > spec.upper_bound:
            reasons.append(InvalidReason.LENGTH_OUT_OF_RANGE)
        if parameters.k2 > self.K2_MAX:
            reasons.append(InvalidReason.HIGH_THRESHOLD_TOO_HIGH)

        min_length = TARGET_LENGTH_MIN
        if (
            spec.coverage == self.HIGH_COVERAGE_LEVEL
            and request.focus is Focus.DIVERSE
            and length < self.HIGH_COVERAGE_MIN_LENGTH
        ):
            reasons.append(InvalidReason.SHORT_TARGET_AT_HIGH_COVERAGE)
            min_length = self.HIGH_COVERAGE_MIN_LENGTH

        return ValidityVerdict(
            valid=not reasons,
            upper_bound=spec.upper_bound,
            min_length=min_length,
            reasons=tuple(reasons),
        )


def advise_seg(request: AdvisorRequest) -> List[CoverageResult]:
    """Convenience wrapper around a default SEGParameterEngine."""
    return SEGParameterEngine().advise(request)
