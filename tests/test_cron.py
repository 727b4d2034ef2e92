# FILE: tests/test_cron.py
"""
Tests for unloggarr/scheduler/cron.py
"""

from datetime import datetime

import pytest

from unloggarr.scheduler.cron import matches, next_run_time, parse_pattern


class TestMatches:

    def test_step_minute(self):
        """*/15 fires on the quarter hour only."""
        assert matches("*/15 * * * *", datetime(2025, 3, 1, 14, 30))
        assert not matches("*/15 * * * *", datetime(2025, 3, 1, 14, 31))

    def test_top_of_hour(self):
        assert matches("0 * * * *", datetime(2025, 3, 1, 9, 0))
        assert not matches("0 * * * *", datetime(2025, 3, 1, 9, 1))

    def test_literal_hour(self):
        assert matches("30 2 * * *", datetime(2025, 3, 1, 2, 30))
        assert not matches("30 2 * * *", datetime(2025, 3, 1, 3, 30))

    def test_wildcard_everything(self):
        assert matches("* *", datetime(2025, 3, 1, 23, 59))

    def test_day_fields_ignored(self):
        assert matches("0 6 1 1 0", datetime(2025, 7, 15, 6, 0))


class TestParsePattern:

    @pytest.mark.parametrize("pattern", [
        "",
        "5",
        "* * * * * *",
        "60 * * * *",
        "*/0 * * * *",
        "*/x * * * *",
        "0 24 * * *",
        "0 */2 * * *",
        "0,30 * * * *",
        "1-5 * * * *",
    ])
    def test_rejects_unsupported(self, pattern):
        with pytest.raises(ValueError):
            parse_pattern(pattern)

    def test_keeps_raw(self):
        cron = parse_pattern("*/5 3 * * *")
        assert (cron.minute, cron.hour, cron.raw) == ("*/5", "3", "*/5 3 * * *")


class TestNextRunTime:

    def test_strictly_after_now(self):
        now = datetime(2025, 3, 1, 14, 30, 0)
        assert next_run_time("*/15 * * * *", now) == datetime(2025, 3, 1, 14, 45)

    def test_drops_seconds(self):
        now = datetime(2025, 3, 1, 14, 44, 59, 999)
        assert next_run_time("*/15 * * * *", now) == datetime(2025, 3, 1, 14, 45)

    def test_rolls_over_day(self):
        now = datetime(2025, 3, 1, 3, 0)
        assert next_run_time("0 2 * * *", now) == datetime(2025, 3, 2, 2, 0)

    def test_hourly(self):
        assert next_run_time("0 * * * *", datetime(2025, 3, 1, 9, 0)) == datetime(2025, 3, 1, 10, 0)
