"""Tests for polardigest.analytics.sleep -- nightly sleep summaries."""

import json

from polardigest.config import SummaryConfig
from polardigest.analytics.sleep import summarize_sleep
from polardigest.analytics.summary import SleepSummary

from tests.conftest import make_sleep_night

OVERNIGHT_HR = {"22:00": 62, "23:00": 58, "00:00": 56, "01:00": 54, "02:00": 55}


class TestSummarizeSleep:
    def test_durations_in_minutes(self):
        result = summarize_sleep(make_sleep_night())
        assert isinstance(result, SleepSummary)
        assert result.light_sleep_min == 240
        assert result.deep_sleep_min == 90
        assert result.rem_sleep_min == 90

    def test_device_fields(self):
        result = summarize_sleep(make_sleep_night(sleep_charge=4, continuity=2.8))
        assert result.sleep_score == 78.5
        assert result.sleep_cycles == 4
        assert result.sleep_charge == 4
        assert result.continuity == 2.8

    def test_interruptions(self):
        night = make_sleep_night(
            total_interruption_duration=1800,
            short_interruption_duration=600,
            long_interruption_duration=1200,
        )
        result = summarize_sleep(night)
        assert result.total_interruption_min == 30
        assert result.short_interruption_min == 10
        assert result.long_interruption_min == 20

    def test_architecture(self, night_hypnogram):
        result = summarize_sleep(make_sleep_night(hypnogram=night_hypnogram))
        arch = result.architecture
        assert arch.light_min == 260
        assert arch.cycle_count == 4
        assert arch.avg_cycle_min == 110.0
        assert arch.deep_before_midpoint_pct == 66.7

    def test_architecture_without_device_cycles(self, night_hypnogram):
        night = make_sleep_night(hypnogram=night_hypnogram, sleep_cycles=None)
        assert summarize_sleep(night).architecture.cycle_count == 2

    def test_overnight_heart_rate(self):
        result = summarize_sleep(make_sleep_night(heart_rate=OVERNIGHT_HR))
        hr = result.heart_rate
        assert hr.sample_count == 5
        assert hr.min == 54.0
        assert hr.max == 62.0
        assert hr.slope_per_hour < 0
        assert hr.nadir == 55.0  # mean of 56, 54, 55

    def test_custom_nadir_window(self):
        config = SummaryConfig(nadir_window=1)
        result = summarize_sleep(make_sleep_night(heart_rate=OVERNIGHT_HR), config)
        assert result.heart_rate.nadir == 54.0

    def test_no_hypnogram_or_heart_rate(self):
        result = summarize_sleep(make_sleep_night())
        assert result.architecture is None
        assert result.heart_rate is None
        data = result.to_dict()
        assert "architecture" not in data
        assert "heart_rate" not in data

    def test_missing_start_time(self, night_hypnogram):
        night = make_sleep_night(hypnogram=night_hypnogram)
        del night["sleep_start_time"]
        result = summarize_sleep(night)
        assert result.architecture is None
        assert result.light_sleep_min == 240

    def test_to_json(self, night_hypnogram):
        text = summarize_sleep(make_sleep_night(hypnogram=night_hypnogram)).to_json()
        data = json.loads(text)
        assert data["date"] == "2026-02-04"
        assert data["architecture"]["rem_entries"] == 2

    def test_non_numeric_heart_rate_skipped(self):
        hr = dict(OVERNIGHT_HR, **{"22:05": "n/a"})
        result = summarize_sleep(make_sleep_night(heart_rate=hr))
        assert result.heart_rate.sample_count == 5

    def test_non_numeric_stage_skipped(self, night_hypnogram):
        hypnogram = dict(night_hypnogram, **{"03:00": "?"})
        result = summarize_sleep(make_sleep_night(hypnogram=hypnogram))
        assert result.architecture.segment_count == 10

    def test_non_numeric_duration_absent(self):
        result = summarize_sleep(make_sleep_night(rem_sleep="unknown"))
        assert result.rem_sleep_min is None
