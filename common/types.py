"""
Shared type definitions for the SEG / fLPS parameter advisors.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union
from typing_extensions import NotRequired, TypedDict


# =============================================================================
# ENUMS
# =============================================================================

class Focus(str, Enum):
    """How tightly the recommended parameters centre on the target length."""
    DIVERSE = "DIVERSE"  # Typical length variance allowed (default)
    NARROW = "NARROW"    # Length variance minimized

    @classmethod
    def from_option(cls, value: Optional[str]) -> "Focus":
        """Exactly 'narrow' selects NARROW; anything else is DIVERSE."""
        if value == "narrow":
            return cls.NARROW
        return cls.DIVERSE


class AlgorithmKind(str, Enum):
    """Downstream algorithm the parameters are recommended for."""
    FILTER = "FILTER"      # SEG sliding-window complexity filter
    DETECTOR = "DETECTOR"  # fLPS compositional-bias detector


class InvalidReason(str, Enum):
    """Why a computed parameter tuple was reported as NA."""
    LENGTH_OUT_OF_RANGE = "length_out_of_range"
    HIGH_THRESHOLD_TOO_HIGH = "high_threshold_too_high"                # SEG: K2 > 4.2
    SHORT_TARGET_AT_HIGH_COVERAGE = "short_target_at_high_coverage"    # SEG: 40%, DIVERSE, length < 10
    THRESHOLD_TOO_PERMISSIVE = "threshold_too_permissive"              # fLPS: t > 0.001
    MIN_WINDOW_TOO_SHORT = "min_window_too_short"                      # fLPS: m < 5
    EXCLUDED_COMBINATION = "excluded_combination"                      # fLPS: focus/coverage/length exclusions


# =============================================================================
# REQUEST
# =============================================================================

class RequestValidationError(ValueError):
    """Raised when an advisor request is malformed."""
    pass


@dataclass(frozen=True)
class AdvisorRequest:
    """Immutable input shared by every coverage level of one invocation."""
    target_length: int
    focus: Focus = Focus.DIVERSE
    algorithm: AlgorithmKind = AlgorithmKind.FILTER

    def __post_init__(self):
        if isinstance(self.target_length, bool) or not isinstance(self.target_length, int):
            raise RequestValidationError(
                f"target_length must be an integer, got {self.target_length!r}"
            )
        if self.target_length < 1:
            raise RequestValidationError(
                f"target_length must be a positive number of residues, got {self.target_length}"
            )
        if not isinstance(self.focus, Focus):
            raise RequestValidationError(f"focus must be a Focus, got {self.focus!r}")
        if not isinstance(self.algorithm, AlgorithmKind):
            raise RequestValidationError(
                f"algorithm must be an AlgorithmKind, got {self.algorithm!r}"
            )


# =============================================================================
# PARAMETER TUPLES
# =============================================================================

@dataclass(frozen=True)
class FilterParameters:
    """SEG window length L with complexity thresholds K1 <= K2."""
    window_length: int
    k1: float
    k2: float


@dataclass(frozen=True)
class DetectorParameters:
    """fLPS minimum/maximum window lengths m, M and binomial threshold t."""
    min_window: int
    max_window: int
    log10_threshold: float

    @property
    def threshold(self) -> float:
        return 10.0 ** self.log10_threshold


ParameterTuple = Union[FilterParameters, DetectorParameters]


# =============================================================================
# VERDICTS AND RESULTS
# =============================================================================

@dataclass(frozen=True)
class ValidityVerdict:
    """
    Outcome of the validity gate for one coverage level.

    min_length and upper_bound are the length bounds quoted in the NA message.
    """
    valid: bool
    upper_bound: int
    min_length: int = 5
    reasons: Tuple[InvalidReason, ...] = ()


class CoverageRow(TypedDict):
    """Flat view of one coverage level, for logging."""
    coverage: int
    valid: bool
    parameters: Dict[str, Union[int, float]]
    reasons: List[str]
    regimes: Dict[str, str]
    upper_bound: int
    threshold: NotRequired[float]


@dataclass(frozen=True)
class CoverageResult:
    """Computed tuple, its verdict and the regression bands that produced it."""
    coverage: int
    computed: ParameterTuple
    verdict: ValidityVerdict
    regimes: Dict[str, str] = field(default_factory=dict)

    @property
    def is_na(self) -> bool:
        return not self.verdict.valid

    @property
    def parameters(self) -> Optional[ParameterTuple]:
        """The usable tuple, or None (NA) when the gate rejected it."""
        if self.verdict.valid:
            return self.computed
        return None

    def to_dict(self) -> CoverageRow:
        row: CoverageRow = {
            "coverage": self.coverage,
            "valid": self.verdict.valid,
            "parameters": asdict(self.computed),
            "reasons": [reason.value for reason in self.verdict.reasons],
            "regimes": dict(self.regimes),
            "upper_bound": self.verdict.upper_bound,
        }
        if isinstance(self.computed, DetectorParameters):
            row["threshold"] = self.computed.threshold
        return row
