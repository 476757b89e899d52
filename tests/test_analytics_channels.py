"""Tests for polardigest.analytics.channels -- per-channel exercise stats."""

import math

import numpy as np
import pytest

from polardigest.analytics.channels import (
    OVERALL,
    speed_splits,
    altitude_stats,
    power_stats,
    power_window,
    normalized_power,
    rr_interval_stats,
    simple_stats,
    SpeedSplit,
    PaceSummary,
    HrvStats,
)
from polardigest.decoders.samples import decode


# ========================== Pace splits ==========================


class TestSpeedSplits:
    def test_empty_speed_is_none(self):
        assert speed_splits([]) is None
        assert speed_splits([None, None]) is None

    def test_overall_without_distance(self):
        result = speed_splits([10.0, None, 12.0])
        assert isinstance(result, PaceSummary)
        assert len(result.splits) == 1
        split = result.splits[0]
        assert split.km == OVERALL
        assert split.avg_speed_kmh == 11.0
        assert split.pace_min_per_km == round(60 / 11.0, 2)

    def test_zero_speed_zero_pace(self):
        result = speed_splits([0.0, 0.0])
        assert result.splits[0].pace_min_per_km == 0.0

    def test_kilometre_splits(self):
        # 6 samples, distance crosses 1 km at index 2, ends at 1.6 km
        speed = [10.0, 10.0, 10.0, 12.0, 12.0, 12.0]
        dist = [300.0, 700.0, 1000.0, 1200.0, 1400.0, 1600.0]
        result = speed_splits(speed, dist)
        assert [s.km for s in result.splits] == [1, 2]
        assert result.splits[0].avg_speed_kmh == 10.0
        assert result.splits[0].pace_min_per_km == 6.0
        assert result.splits[1].avg_speed_kmh == 12.0
        assert result.splits[1].pace_min_per_km == 5.0

    def test_final_sample_closes_partial_split(self):
        result = speed_splits([10.0, 10.0], [100.0, 400.0])
        assert len(result.splits) == 1
        assert result.splits[0].km == 1

    def test_split_ranges_use_aligned_indices(self):
        # Index 1 is missing in distance; its speed (99) must be dropped too.
        speed = decode("10,99,10,20,20")
        dist = decode("500,,1000,1500,2000")
        result = speed_splits(speed, dist)
        assert result.splits[0].avg_speed_kmh == 10.0
        assert result.splits[1].avg_speed_kmh == 20.0

    def test_distance_all_absent_falls_back_to_overall(self):
        result = speed_splits([10.0, 14.0], [None, None])
        assert len(result.splits) == 1
        assert result.splits[0].km == OVERALL
        assert result.splits[0].avg_speed_kmh == 12.0

    def test_split_dataclass(self):
        split = SpeedSplit(km=1, pace_min_per_km=5.0, avg_speed_kmh=12.0)
        assert split.km == 1


# ========================== Altitude ==========================


class TestAltitudeStats:
    def test_empty(self):
        assert altitude_stats([None]) is None

    def test_ascent_and_descent(self):
        result = altitude_stats([100.0, 105.0, 103.0, 110.0, 108.0])
        assert result.total_ascent == 12.0
        assert result.total_descent == 4.0
        assert result.min_elevation == 100.0
        assert result.max_elevation == 110.0

    def test_single_sample(self):
        result = altitude_stats([250.0])
        assert result.total_ascent == 0.0
        assert result.total_descent == 0.0
        assert result.min_elevation == result.max_elevation == 250.0

    def test_gaps_are_skipped(self):
        result = altitude_stats([100.0, None, 102.0])
        assert result.total_ascent == 2.0


# ========================== Power ==========================


class TestPowerWindow:
    def test_one_second(self):
        assert power_window(1.0) == 30

    def test_rounds_up(self):
        assert power_window(4.0) == 8  # ceil(7.5)

    def test_custom_window(self):
        assert power_window(1.0, window_sec=10) == 10

    def test_non_positive_interval(self):
        assert power_window(0) == 30


class TestNormalizedPower:
    def test_constant_series(self):
        assert math.isclose(normalized_power([250.0] * 40, 30), 250.0)

    def test_short_series_is_average(self):
        assert normalized_power([100.0, 200.0], 30) == 150.0

    def test_variable_above_average(self):
        values = [100.0] * 30 + [300.0] * 30
        np_watts = normalized_power(values, 5)
        assert np_watts > np.mean(values)


class TestPowerStats:
    def test_empty(self):
        assert power_stats([None, None], 1.0) is None

    def test_constant_power(self):
        result = power_stats([200.0] * 30, 1.0)
        assert result.avg_power == 200.0
        assert result.normalized_power == 200.0
        assert result.max_power == 200.0
        assert result.variability_index == 1.0

    def test_shorter_than_window(self):
        result = power_stats([100.0, 300.0], 1.0)
        assert result.normalized_power == result.avg_power == 200.0

    def test_zero_average(self):
        result = power_stats([0.0] * 40, 1.0)
        assert result.variability_index == 0.0

    def test_non_default_window(self):
        values = [100.0, 300.0] * 10
        wide = power_stats(values, 1.0, window_sec=30)  # shorter than window
        narrow = power_stats(values, 1.0, window_sec=1)
        assert wide.normalized_power == 200.0
        assert narrow.normalized_power > wide.normalized_power

    def test_recording_interval_changes_window(self):
        # At 10 s per sample the window is 3 samples
        values = [100.0, 100.0, 100.0, 400.0, 400.0, 400.0]
        result = power_stats(values, 10.0)
        assert result.normalized_power > result.avg_power


# ========================== RR intervals ==========================


class TestRRIntervalStats:
    def test_reference_values(self):
        result = rr_interval_stats([800, 810, 795, 805])
        assert isinstance(result, HrvStats)
        assert result.mean_rr == 802.5
        assert result.sdnn == 5.59
        assert result.rmssd == 11.9
        assert result.pnn50 == 0.0

    def test_fewer_than_two(self):
        assert rr_interval_stats([]) is None
        assert rr_interval_stats([800.0, None]) is None

    def test_pnn50(self):
        # diffs: 100, -10, 60 -> two of three exceed 50
        result = rr_interval_stats([800.0, 900.0, 890.0, 950.0])
        assert result.pnn50 == round(2 / 3 * 100, 2)

    def test_exactly_50_not_counted(self):
        result = rr_interval_stats([800.0, 850.0])
        assert result.pnn50 == 0.0

    def test_population_sdnn(self):
        result = rr_interval_stats([800.0, 900.0])
        assert result.sdnn == 50.0


# ========================== Simple stats ==========================


class TestSimpleStats:
    def test_empty(self):
        assert simple_stats([None]) is None

    def test_avg_and_max(self):
        result = simple_stats([80.0, None, 90.0])
        assert result.avg == 85.0
        assert result.max == 90.0
        assert result.min is None

    def test_avg_only(self):
        result = simple_stats([49.0, 51.0], with_max=False)
        assert result.avg == 50.0
        assert result.max is None

    def test_scaled_temperature(self):
        result = simple_stats([215.0, 225.0], scale=10.0, with_min=True)
        assert result.avg == 22.0
        assert result.min == 21.5
        assert result.max == 22.5

    def test_idempotent(self):
        values = [1.0, None, 2.5, 3.25]
        assert simple_stats(values) == simple_stats(values)
