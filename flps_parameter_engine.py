#!/usr/bin/env python3
"""
flps_parameter_engine.py

fLPS Parameter Engine for Compositional Bias Discovery

Recommends fLPS minimum window m, maximum window M and binomial p-value
threshold t for a given target length of compositionally-biased region, at
five estimated protein coverage levels (2%, 5%, 10%, 25%, 40%).

Design Philosophy:
- DETERMINISTIC: Same request always yields the same five rows
- TABLE-DRIVEN: Each coverage level is a frozen set of ordered band tables
- INDEPENDENT LEVELS: No state carried from one coverage level to the next
- FAIL-SOFT GATING: Out-of-bounds tuples become NA rows, never exceptions

Regression shape:
- M:       power law a * x^b, rounded half away from zero
- m:       M - c, or its own rounded power law for shorter targets
- log10 t: linear law a * x + b (t itself is reported as 10^log10 t)

Copyright 2023. Paul Martin Harrison.
Licensed under the 3-clause BSD license. See LICENSE bundled with this program.
Version: 1.0.0
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from common.constants import (
    COVERAGE_LEVELS,
    FLPS_DIVERSE_40_MIN_LENGTH_EXCLUSIVE,
    FLPS_LOG10_THRESHOLD_MAX,
    FLPS_MIN_WINDOW_MIN,
    FLPS_NARROW_25_MIN_LENGTH,
    FLPS_NARROW_40_MIN_LENGTH,
    FLPS_NARROW_MIN_LENGTH_EXCLUSIVE,
    TARGET_LENGTH_MIN,
)
from common.regression import (
    Constant,
    LinearLaw,
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
    DetectorParameters,
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
class FLPSLevelSpec:
    """Regression tables and bounds for one (focus, coverage) combination."""
    coverage: int
    upper_bound: int
    max_window: Piecewise
    min_window: Piecewise
    log10_threshold: Piecewise


# =============================================================================
# REGRESSION TABLES
# =============================================================================

FLPS_LEVEL_SPECS: Dict[Focus, Tuple[FLPSLevelSpec, ...]] = {
    Focus.DIVERSE: (
        FLPSLevelSpec(
            coverage=2,
            upper_bound=100,
            max_window=single(PowerLaw(2.534, 0.506), rounded=True),
            min_window=single(Offset(2), rounded=True),
            log10_threshold=single(LinearLaw(-0.153, -3.994)),
        ),
        FLPSLevelSpec(
            coverage=5,
            upper_bound=200,
            max_window=single(PowerLaw(3.46, 0.508), rounded=True),
            min_window=single(Offset(4), rounded=True),
            log10_threshold=single(LinearLaw(-0.098, -3.305)),
        ),
        FLPSLevelSpec(
            coverage=10,
            upper_bound=250,
            max_window=single(PowerLaw(3.912, 0.543), rounded=True),
            min_window=single(Offset(10), rounded=True),
            log10_threshold=single(LinearLaw(-0.055, -3.635)),
        ),
        FLPSLevelSpec(
            coverage=25,
            upper_bound=300,
            max_window=two_regimes(105, PowerLaw(5.647, 0.56), PowerLaw(6.096, 0.552), rounded=True),
            min_window=two_regimes(105, PowerLaw(0.872, 0.797), Offset(50), rounded=True),
            log10_threshold=two_regimes(105, LinearLaw(-0.039, -2.381), LinearLaw(-0.031, -2.93)),
        ),
        FLPSLevelSpec(
            coverage=40,
            upper_bound=300,
            max_window=two_regimes(105, PowerLaw(9.82, 0.522), PowerLaw(11.126, 0.484), rounded=True),
            min_window=two_regimes(105, PowerLaw(0.481, 0.876), Offset(80), rounded=True),
            log10_threshold=two_regimes(105, LinearLaw(-0.022, -2.709), LinearLaw(-0.025, -2.762)),
        ),
    ),
    # NARROW: m == M at every level
    Focus.NARROW: (
        FLPSLevelSpec(
            coverage=2,
            upper_bound=100,
            max_window=single(PowerLaw(2.324, 0.539), rounded=True),
            min_window=single(Offset(0), rounded=True),
            log10_threshold=single(LinearLaw(-0.149, -3.883)),
        ),
        FLPSLevelSpec(
            coverage=5,
            upper_bound=200,
            max_window=single(PowerLaw(2.976, 0.556), rounded=True),
            min_window=single(Offset(0), rounded=True),
            # 28 < x < 33 averages both regimes; 33 itself is already long
            log10_threshold=with_boundary_mean(
                28, 33, LinearLaw(-0.127, -2.183), LinearLaw(-0.09, -3.173), inclusive_upper=False
            ),
        ),
        FLPSLevelSpec(
            coverage=10,
            upper_bound=200,
            max_window=single(PowerLaw(3.493, 0.572), rounded=True),
            min_window=single(Offset(0), rounded=True),
            log10_threshold=single(LinearLaw(-0.058, -2.731)),
        ),
        FLPSLevelSpec(
            coverage=25,
            upper_bound=300,
            max_window=single(PowerLaw(3.394, 0.672), rounded=True),
            min_window=single(Offset(0), rounded=True),
            log10_threshold=two_regimes(90, Constant(-4.0), LinearLaw(-0.028, -1.695)),
        ),
        FLPSLevelSpec(
            coverage=40,
            upper_bound=300,
            max_window=single(PowerLaw(0.889, 0.977), rounded=True),
            min_window=single(Offset(0), rounded=True),
            log10_threshold=single(Constant(-4.0)),
        ),
    ),
}


# =============================================================================
# ENGINE
# =============================================================================

class FLPSParameterEngine:
    """
    fLPS Parameter Engine.

    Usage:
        engine = FLPSParameterEngine()
        request = AdvisorRequest(target_length=40, algorithm=AlgorithmKind.DETECTOR)
        for result in engine.advise(request):
            if result.parameters is not None:
                print(result.coverage, result.parameters.threshold)
    """

    VERSION = "1.0.0"
    ALGORITHM = AlgorithmKind.DETECTOR

    LOG10_THRESHOLD_MAX = FLPS_LOG10_THRESHOLD_MAX
    MIN_WINDOW_MIN = FLPS_MIN_WINDOW_MIN

    def __init__(self, level_specs: Optional[Dict[Focus, Tuple[FLPSLevelSpec, ...]]] = None):
        if level_specs is None:
            level_specs = FLPS_LEVEL_SPECS
        self.level_specs = level_specs

    def advise(self, request: AdvisorRequest) -> List[CoverageResult]:
        """
        Compute one result per coverage level, in coverage order.

        Args:
            request: Target length and focus (algorithm must be DETECTOR)

        Returns:
            Five CoverageResult entries for coverage 2, 5, 10, 25, 40
        """
        if request.algorithm is not self.ALGORITHM:
            raise ValueError(
                f"FLPSParameterEngine cannot advise for algorithm {request.algorithm.value}"
            )

        specs = self.level_specs[request.focus]
        results = [self.compute_level(request, spec) for spec in specs]

        coverages = tuple(result.coverage for result in results)
        if coverages != COVERAGE_LEVELS:
            raise ValueError(f"fLPS level table out of order: {coverages}")
        return results

    def compute_level(self, request: AdvisorRequest, spec: FLPSLevelSpec) -> CoverageResult:
        """Evaluate one coverage level's tables and gate the resulting tuple."""
        length = request.target_length

        max_window, max_regime = spec.max_window.evaluate(length)
        min_window, min_regime = spec.min_window.evaluate(length, primary=max_window)
        log10_threshold, threshold_regime = spec.log10_threshold.evaluate(length)

        parameters = DetectorParameters(
            min_window=min_window,
            max_window=max_window,
            log10_threshold=log10_threshold,
        )
        verdict = self.check_validity(request, spec, parameters)

        result = CoverageResult(
            coverage=spec.coverage,
            computed=parameters,
            verdict=verdict,
            regimes={
                "max_window": max_regime,
                "min_window": min_regime,
                "log10_threshold": threshold_regime,
            },
        )
        logger.debug("fLPS level %s%%: %s", spec.coverage, result.to_dict())
        return result

    def check_validity(
        self,
        request: AdvisorRequest,
        spec: FLPSLevelSpec,
        parameters: DetectorParameters,
    ) -> ValidityVerdict:
        """
        Gate a computed fLPS tuple.

        Invalid when the target length is outside [5, upper_bound], t > 0.001
        or m < 5, plus the focus/coverage/length combinations that are
        excluded regardless of the formula output.
        """
        reasons = []
        length = request.target_length

        if length < TARGET_LENGTH_MIN or length > spec.upper_bound:
            reasons.append(InvalidReason.LENGTH_OUT_OF_RANGE)
        if parameters.log10_threshold > self.LOG10_THRESHOLD_MAX:
            reasons.append(InvalidReason.THRESHOLD_TOO_PERMISSIVE)
        if parameters.min_window < self.MIN_WINDOW_MIN:
            reasons.append(InvalidReason.MIN_WINDOW_TOO_SHORT)
        if self.is_excluded(request.focus, spec.coverage, length):
            reasons.append(InvalidReason.EXCLUDED_COMBINATION)

        return ValidityVerdict(
            valid=not reasons,
            upper_bound=spec.upper_bound,
            min_length=TARGET_LENGTH_MIN,
            reasons=tuple(reasons),
        )

    @staticmethod
    def is_excluded(focus: Focus, coverage: int, length: int) -> bool:
        """Focus/coverage/length combinations never reported, whatever the formulas give."""
        if focus is Focus.NARROW:
            if length <= FLPS_NARROW_MIN_LENGTH_EXCLUSIVE:
                return True
            if coverage == 25 and length < FLPS_NARROW_25_MIN_LENGTH:
                return True
            if coverage == 40 and length < FLPS_NARROW_40_MIN_LENGTH:
                return True
            return False
        return coverage == 40 and length <= FLPS_DIVERSE_40_MIN_LENGTH_EXCLUSIVE


def advise_flps(request: AdvisorRequest) -> List[CoverageResult]:
    """Convenience wrapper around a default FLPSParameterEngine."""
    return FLPSParameterEngine().advise(request)
