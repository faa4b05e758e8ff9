#!/usr/bin/env python3
"""
Shared test fixtures for the parameter advisor test suite.

Provides reusable fixtures for:
- Engines with the built-in regression tables
- Request factories for both algorithms
- The full grid of valid target lengths
"""

import logging
import sys
from pathlib import Path
from typing import Callable

import pytest

# Add parent to path for module imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from common.constants import DEFAULT_TARGET_LENGTH, TARGET_LENGTH_MAX, TARGET_LENGTH_MIN
from common.types import AdvisorRequest, AlgorithmKind, Focus
from flps_parameter_engine import FLPSParameterEngine
from seg_parameter_engine import SEGParameterEngine


# ============================================================================
# ENGINES
# ============================================================================

@pytest.fixture
def seg_engine() -> SEGParameterEngine:
    return SEGParameterEngine()


@pytest.fixture
def flps_engine() -> FLPSParameterEngine:
    return FLPSParameterEngine()


# ============================================================================
# REQUESTS
# ============================================================================

@pytest.fixture
def seg_request() -> Callable[..., AdvisorRequest]:
    """Factory for SEG (FILTER) requests."""
    def _make(target_length: int = DEFAULT_TARGET_LENGTH, focus: Focus = Focus.DIVERSE) -> AdvisorRequest:
        return AdvisorRequest(target_length=target_length, focus=focus, algorithm=AlgorithmKind.FILTER)
    return _make


@pytest.fixture
def flps_request() -> Callable[..., AdvisorRequest]:
    """Factory for fLPS (DETECTOR) requests."""
    def _make(target_length: int = DEFAULT_TARGET_LENGTH, focus: Focus = Focus.DIVERSE) -> AdvisorRequest:
        return AdvisorRequest(target_length=target_length, focus=focus, algorithm=AlgorithmKind.DETECTOR)
    return _make


@pytest.fixture
def valid_lengths() -> range:
    """Every target length the regressions were fitted for."""
    return range(TARGET_LENGTH_MIN, TARGET_LENGTH_MAX + 1)


# ============================================================================
# LOGGING
# ============================================================================

@pytest.fixture(autouse=True)
def reset_advisor_logging():
    """Remove handlers installed by setup_logging so they never outlive a test's captured streams."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        if getattr(handler, "_advisor_handler", False):
            root_logger.removeHandler(handler)
            handler.close()
