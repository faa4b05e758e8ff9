"""
common - Shared utilities for the SEG / fLPS parameter advisors.

Provides:
- types: Request, parameter tuples, verdicts and per-level results
- constants: Coverage levels, length bounds, gate limits, report text
- regression: Power/log/linear laws, boundary means and band tables
- input_validation: -f / -l option parsing and range normalisation
- report: Text report rendering
- logging_config: Console and rotating-file logging setup
"""

from common.constants import (
    COVERAGE_LEVELS,
    DEFAULT_TARGET_LENGTH,
    TARGET_LENGTH_MAX,
    TARGET_LENGTH_MIN,
)
from common.types import (
    AdvisorRequest,
    AlgorithmKind,
    CoverageResult,
    DetectorParameters,
    FilterParameters,
    Focus,
    InvalidReason,
    RequestValidationError,
    ValidityVerdict,
)

__all__ = [
    "COVERAGE_LEVELS",
    "DEFAULT_TARGET_LENGTH",
    "TARGET_LENGTH_MAX",
    "TARGET_LENGTH_MIN",
    "AdvisorRequest",
    "AlgorithmKind",
    "CoverageResult",
    "DetectorParameters",
    "FilterParameters",
    "Focus",
    "InvalidReason",
    "RequestValidationError",
    "ValidityVerdict",
]
