"""
common/constants.py - Centralized Configuration Constants

All fixed bounds, defaults and report text shared by the SEG and fLPS
parameter advisors. The per-level regression tables live beside their
engines (seg_parameter_engine.py, flps_parameter_engine.py).

Usage:
    from common.constants import (
        COVERAGE_LEVELS,
        TARGET_LENGTH_MIN,
        TARGET_LENGTH_MAX,
        DEFAULT_TARGET_LENGTH,
    )
"""

from typing import Tuple


# =============================================================================
# COVERAGE LEVELS (percent of reference proteins expected to be annotated)
# =============================================================================

COVERAGE_LEVELS: Tuple[int, ...] = (2, 5, 10, 25, 40)


# =============================================================================
# TARGET LENGTH (residues)
# =============================================================================

TARGET_LENGTH_MIN = 5
TARGET_LENGTH_MAX = 300

# Used when -l is absent, unparsable or out of range
DEFAULT_TARGET_LENGTH = 15


# =============================================================================
# SEG (FILTER) GATE
# =============================================================================

# K2 above this is not a usable complexity threshold
SEG_K2_MAX = 4.2

# Coverage 40% with DIVERSE focus needs at least this target length
SEG_HIGH_COVERAGE_MIN_LENGTH = 10
SEG_HIGH_COVERAGE_LEVEL = 40


# =============================================================================
# fLPS (DETECTOR) GATE
# =============================================================================

# log10 of the largest usable binomial p-value threshold (t <= 0.001)
FLPS_LOG10_THRESHOLD_MAX = -3.0

# Smallest usable minimum window length m
FLPS_MIN_WINDOW_MIN = 5

# Hard exclusions, independent of formula output
FLPS_NARROW_MIN_LENGTH_EXCLUSIVE = 10        # NARROW: length <= 10 excluded
FLPS_NARROW_25_MIN_LENGTH = 50               # NARROW, 25%: length < 50 excluded
FLPS_NARROW_40_MIN_LENGTH = 100              # NARROW, 40%: length < 100 excluded
FLPS_DIVERSE_40_MIN_LENGTH_EXCLUSIVE = 15    # DIVERSE, 40%: length <= 15 excluded


# =============================================================================
# PROGRAM NAMES
# =============================================================================

SEG_PROGRAM_NAME = "SEGparameters"
FLPS_PROGRAM_NAME = "fLPSparameters"


# =============================================================================
# REPORT TEXT
# =============================================================================

FOCUS_EXPLANATIONS = {
    "DIVERSE": (
        "A DIVERSE focus means that a typical or average level of length variance "
        "for the annotated regions is allowed."
    ),
    "NARROW": "A NARROW focus means that length variance is minimized for the annotated regions.",
}

CITATION = (
    " Harrison, PM. 'Optimal strategies for discovery of low-complexity or "
    "compositionally-biased regions',\n"
    " submitted. \n"
)

PROJECT_URLS = (
    " http://biology.mcgill.ca/faculty/harrison/flps.html\n"
    " OR \n"
    "https://github.com/pmharrison/flps\n"
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def is_target_length_in_range(length: int) -> bool:
    """Check whether a target length lies inside the fitted range (inclusive)."""
    return TARGET_LENGTH_MIN <= length <= TARGET_LENGTH_MAX
