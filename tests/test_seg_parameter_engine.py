#!/usr/bin/env python3
"""
Tests for seg_parameter_engine.py

Covers:
- Engine constants and level tables
- Concrete regression values (direct arithmetic)
- Boundary-mean band selection
- NARROW focus (L = target length, K1 = K2)
- Validity gate, including the 40% DIVERSE short-target case
- Properties over the whole 5-300 length range
"""

import math
from decimal import Decimal, ROUND_HALF_UP

import pytest

from common.constants import COVERAGE_LEVELS
from common.regression import BOUNDARY_MEAN, LONG, SHORT, SINGLE
from common.types import (
    AdvisorRequest,
    AlgorithmKind,
    FilterParameters,
    Focus,
    InvalidReason,
)
import seg_parameter_engine
from seg_parameter_engine import SEG_LEVEL_SPECS, SEGParameterEngine, advise_seg


def c_round(value: float) -> int:
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def level(results, coverage):
    return next(result for result in results if result.coverage == coverage)


class TestSEGParameterEngineInit:
    """Tests for engine initialization."""

    def test_engine_init(self, seg_engine):
        assert seg_engine.VERSION == "1.0.0"
        assert seg_engine.ALGORITHM is AlgorithmKind.FILTER
        assert seg_engine.level_specs is SEG_LEVEL_SPECS

    def test_empty_table_is_kept(self, seg_request):
        engine = SEGParameterEngine(level_specs={})
        assert engine.level_specs == {}
        with pytest.raises(KeyError):
            engine.advise(seg_request(15))

    def test_module_attribution(self):
        assert seg_parameter_engine.__author__ == "Paul Martin Harrison"
        assert seg_parameter_engine.__license__ == "BSD-3-Clause"
        assert "Copyright 2023. Paul Martin Harrison." in seg_parameter_engine.__doc__

    def test_engine_constants(self, seg_engine):
        assert seg_engine.K2_MAX == 4.2
        assert seg_engine.HIGH_COVERAGE_LEVEL == 40
        assert seg_engine.HIGH_COVERAGE_MIN_LENGTH == 10

    @pytest.mark.parametrize("focus,upper_bounds", [
        (Focus.DIVERSE, (200, 300, 300, 300, 300)),
        (Focus.NARROW, (250, 300, 300, 300, 250)),
    ])
    def test_upper_bounds(self, focus, upper_bounds):
        assert tuple(spec.upper_bound for spec in SEG_LEVEL_SPECS[focus]) == upper_bounds

    def test_tables_in_coverage_order(self):
        for specs in SEG_LEVEL_SPECS.values():
            assert tuple(spec.coverage for spec in specs) == COVERAGE_LEVELS


class TestConcreteValues:
    """Results checked against direct arithmetic."""

    def test_diverse_15_coverage_2(self, seg_engine, seg_request):
        """L = round(1.274 * 15^0.823), K2 = 0.701 ln 15 + 0.155, K1 = K2 - 0.3."""
        result = level(seg_engine.advise(seg_request(15)), 2)

        k2 = 0.701 * math.log(15) + 0.155
        assert result.verdict.valid
        assert result.parameters.window_length == c_round(1.274 * math.pow(15, 0.823))
        assert result.parameters.window_length == 12
        assert result.parameters.k2 == pytest.approx(k2)
        assert result.parameters.k1 == pytest.approx(k2 - 0.3)
        assert result.regimes["window_length"] == SHORT

    def test_diverse_15_all_levels_valid(self, seg_engine, seg_request):
        results = seg_engine.advise(seg_request(15))
        assert all(result.verdict.valid for result in results)

    def test_diverse_coverage_5_offset_changes_above_50(self, seg_engine, seg_request):
        short = level(seg_engine.advise(seg_request(50)), 5).parameters
        long = level(seg_engine.advise(seg_request(51)), 5).parameters

        assert short.k2 - short.k1 == pytest.approx(0.3)
        assert long.k2 - long.k1 == pytest.approx(0.4)
        assert long.k2 == pytest.approx(0.337 * math.log(51) + 1.883)
        assert long.window_length == c_round(0.747 * math.pow(51, 0.912))

    def test_diverse_coverage_25_single_window_law(self, seg_engine, seg_request):
        result = level(seg_engine.advise(seg_request(100)), 25)
        assert result.parameters.window_length == c_round(1.507 * math.pow(100, 0.762))
        assert result.regimes["window_length"] == SINGLE
        assert result.regimes["k2"] == LONG

    def test_diverse_coverage_40_offset(self, seg_engine, seg_request):
        result = level(seg_engine.advise(seg_request(80)), 40)
        assert result.parameters.k2 - result.parameters.k1 == pytest.approx(0.2)


class TestBoundaryMean:
    """Boundary zone 35 < x <= 45 of the DIVERSE 2% level."""

    def test_35_uses_first_regime(self, seg_engine, seg_request):
        result = level(seg_engine.advise(seg_request(35)), 2)
        assert result.regimes == {"window_length": SHORT, "k2": SHORT, "k1": SINGLE}
        assert result.parameters.window_length == c_round(1.274 * math.pow(35, 0.823))
        assert result.parameters.k2 == pytest.approx(0.701 * math.log(35) + 0.155)

    def test_40_uses_mean_of_both_regimes(self, seg_engine, seg_request):
        result = level(seg_engine.advise(seg_request(40)), 2)

        window = (1.274 * math.pow(40, 0.823) + 1.004 * math.pow(40, 0.891)) / 2.0
        k2 = ((0.701 * math.log(40) + 0.155) + (0.447 * math.log(40) + 1.038)) / 2.0
        assert result.regimes["window_length"] == BOUNDARY_MEAN
        assert result.regimes["k2"] == BOUNDARY_MEAN
        assert result.parameters.window_length == c_round(window)
        assert result.parameters.k2 == pytest.approx(k2)
        assert result.parameters.k1 == pytest.approx(k2 - 0.3)

    def test_45_is_still_inside_the_mean_band(self, seg_engine, seg_request):
        """The second regime starts strictly above 45."""
        result = level(seg_engine.advise(seg_request(45)), 2)
        assert result.regimes["k2"] == BOUNDARY_MEAN

    def test_46_uses_second_regime(self, seg_engine, seg_request):
        result = level(seg_engine.advise(seg_request(46)), 2)
        assert result.regimes["k2"] == LONG
        assert result.parameters.window_length == c_round(1.004 * math.pow(46, 0.891))
        assert result.parameters.k2 == pytest.approx(0.447 * math.log(46) + 1.038)

    @pytest.mark.parametrize("length,expected", [(55, SHORT), (60, BOUNDARY_MEAN), (65, BOUNDARY_MEAN), (66, LONG)])
    def test_coverage_40_bands(self, seg_engine, seg_request, length, expected):
        result = level(seg_engine.advise(seg_request(length)), 40)
        assert result.regimes["window_length"] == expected
        assert result.regimes["k2"] == expected


class TestNarrowFocus:
    """NARROW focus: L is the target length and K1 equals K2."""

    @pytest.mark.parametrize("length", [5, 20, 45, 50, 56, 250])
    def test_window_is_target_length(self, seg_engine, seg_request, length):
        for result in seg_engine.advise(seg_request(length, Focus.NARROW)):
            assert result.computed.window_length == length
            assert result.computed.k1 == result.computed.k2

    def test_narrow_coverage_10_values(self, seg_engine, seg_request):
        result = level(seg_engine.advise(seg_request(30, Focus.NARROW)), 10)
        assert result.parameters.k2 == pytest.approx(0.803 * math.log(30) + 0.251)

    def test_narrow_boundary_mean(self, seg_engine, seg_request):
        result = level(seg_engine.advise(seg_request(50, Focus.NARROW)), 25)
        k2 = ((0.788 * math.log(50) + 0.499) + (0.278 * math.log(50) + 2.405)) / 2.0
        assert result.regimes["k2"] == BOUNDARY_MEAN
        assert result.parameters.k2 == pytest.approx(k2)

    def test_narrow_260_exceeds_2_and_40_bounds(self, seg_engine, seg_request):
        results = seg_engine.advise(seg_request(260, Focus.NARROW))
        na_levels = [result.coverage for result in results if result.is_na]
        assert na_levels == [2, 40]


class TestValidityGate:
    """Tests for check_validity and NA results."""

    def test_diverse_300_only_coverage_2_is_na(self, seg_engine, seg_request):
        results = seg_engine.advise(seg_request(300))
        assert [result.coverage for result in results if result.is_na] == [2]

        verdict = level(results, 2).verdict
        assert verdict.upper_bound == 200
        assert verdict.min_length == 5
        assert verdict.reasons == (InvalidReason.LENGTH_OUT_OF_RANGE,)
        assert level(results, 2).parameters is None

    def test_k2_above_limit_is_invalid(self, seg_engine, seg_request):
        request = seg_request(100)
        spec = SEG_LEVEL_SPECS[Focus.DIVERSE][1]
        verdict = seg_engine.check_validity(
            request, spec, FilterParameters(window_length=60, k1=4.0, k2=4.3)
        )
        assert not verdict.valid
        assert verdict.reasons == (InvalidReason.HIGH_THRESHOLD_TOO_HIGH,)

    def test_k2_at_limit_is_valid(self, seg_engine, seg_request):
        spec = SEG_LEVEL_SPECS[Focus.DIVERSE][1]
        verdict = seg_engine.check_validity(
            seg_request(100), spec, FilterParameters(window_length=60, k1=3.9, k2=4.2)
        )
        assert verdict.valid

    def test_below_minimum_length_is_invalid(self, seg_engine, seg_request):
        results = seg_engine.advise(seg_request(4))
        assert all(result.is_na for result in results)
        assert all(InvalidReason.LENGTH_OUT_OF_RANGE in result.verdict.reasons for result in results)


class TestHighCoverageShortTarget:
    """Coverage 40% with DIVERSE focus and a target shorter than 10."""

    def test_length_9_quotes_minimum_of_10(self, seg_engine, seg_request):
        results = seg_engine.advise(seg_request(9))
        high = level(results, 40)

        assert high.is_na
        assert high.verdict.min_length == 10
        assert high.verdict.reasons == (InvalidReason.SHORT_TARGET_AT_HIGH_COVERAGE,)
        assert all(result.verdict.valid for result in results if result.coverage != 40)

    def test_length_10_is_valid(self, seg_engine, seg_request):
        assert level(seg_engine.advise(seg_request(10)), 40).verdict.valid

    def test_narrow_focus_not_affected(self, seg_engine, seg_request):
        high = level(seg_engine.advise(seg_request(9, Focus.NARROW)), 40)
        assert high.verdict.valid

    def test_over_upper_bound_uses_generic_minimum(self, seg_engine, seg_request):
        """Same coverage and focus, but failing on the upper bound: generic <5 message."""
        high = level(seg_engine.advise(seg_request(301)), 40)
        assert high.is_na
        assert high.verdict.min_length == 5
        assert high.verdict.reasons == (InvalidReason.LENGTH_OUT_OF_RANGE,)

    def test_length_4_collects_both_reasons(self, seg_engine, seg_request):
        high = level(seg_engine.advise(seg_request(4)), 40)
        assert high.verdict.min_length == 10
        assert set(high.verdict.reasons) == {
            InvalidReason.LENGTH_OUT_OF_RANGE,
            InvalidReason.SHORT_TARGET_AT_HIGH_COVERAGE,
        }


class TestProperties:
    """Invariants over every fitted target length."""

    @pytest.mark.parametrize("focus", list(Focus))
    def test_five_levels_in_order(self, seg_engine, seg_request, valid_lengths, focus):
        for length in valid_lengths:
            results = seg_engine.advise(seg_request(length, focus))
            assert tuple(result.coverage for result in results) == COVERAGE_LEVELS

    @pytest.mark.parametrize("focus", list(Focus))
    def test_k1_never_exceeds_k2(self, seg_engine, seg_request, valid_lengths, focus):
        for length in valid_lengths:
            for result in seg_engine.advise(seg_request(length, focus)):
                if result.parameters is not None:
                    assert result.parameters.k1 <= result.parameters.k2
                    assert result.parameters.k2 <= 4.2

    def test_repeated_calls_are_identical(self, seg_engine, seg_request):
        request = seg_request(40)
        assert seg_engine.advise(request) == seg_engine.advise(request)
        assert advise_seg(request) == seg_engine.advise(request)


class TestAlgorithmMismatch:

    def test_detector_request_rejected(self, seg_engine):
        request = AdvisorRequest(target_length=15, algorithm=AlgorithmKind.DETECTOR)
        with pytest.raises(ValueError, match="cannot advise"):
            seg_engine.advise(request)
