"""
Unit tests for portfolio roll-ups and report periods.
"""
from datetime import date

import pytest

from app.calculators.health import HealthBandKey
from app.services.portfolio import (
    DateRange,
    ProjectRecord,
    ProjectScale,
    TimePeriod,
    calculate_period_stats,
    filter_projects_by_date_range,
    filter_projects_by_scale,
    get_date_range_for_period,
    get_time_period_label,
    summarize_portfolio_health,
)

THURSDAY = date(2026, 10, 22)


def _make_project(id: str, **kwargs) -> ProjectRecord:
    defaults = {
        "id": id,
        "name": f"Project {id}",
        "status": "Planning",
        "priority": "Low",
    }
    defaults.update(kwargs)
    return ProjectRecord(**defaults)


def _portfolio() -> list[ProjectRecord]:
    return [
        # 50 + 30 + 25 + 10 + 10 → 100 excellent
        _make_project("p1", npv=5_000, risk_score=20, status="In progress", priority="High",
                      budget=100_000, actual_costs=80_000, start_date=date(2026, 10, 20), scale="Short-term"),
        # 50 - 10 - 15 - 15 + 0 → 10 critical
        _make_project("p2", npv=-25_000, risk_score=85, status="Cancelled",
                      budget=50_000, actual_costs=70_000, start_date=date(2026, 9, 3), scale="Long-term"),
        # 50 + 5 (risk 60) - 5 + 0 → 50 fair
        _make_project("p3", risk_score=60, status="Paused", start_date=date(2026, 7, 1), scale="Short-term"),
        # 50 + 15 (npv -2000) - 15 (risk 75) - 5 + 0 → 45 fair
        _make_project("p4", npv=-2_000, risk_score=75, status="Paused", budget=10_000),
        # 50 - 15 (risk 90) - 5 + 5 → 35 poor
        _make_project("p5", risk_score=90, status="Paused", priority="Medium",
                      npv=None, start_date=date(2025, 12, 30)),
        # 50 + 15 + 0 → 65 good
        _make_project("p6", status="Complete", budget=40_000, actual_costs=40_000, scale="Medium-term"),
    ]


class TestPortfolioHealth:
    def test_band_counts(self):
        summary = summarize_portfolio_health(_portfolio())
        assert summary.project_count == 6
        assert summary.band_counts == {
            "excellent": 1,
            "good": 1,
            "fair": 2,
            "poor": 1,
            "critical": 1,
        }

    def test_average(self):
        summary = summarize_portfolio_health(_portfolio())
        # (100 + 10 + 50 + 45 + 35 + 65) / 6 = 50.83
        assert summary.average_health_score == pytest.approx(50.8)

    def test_needs_attention_lowest_first(self):
        summary = summarize_portfolio_health(_portfolio())
        assert [ph.project_id for ph in summary.needs_attention] == ["p2", "p5"]
        assert summary.needs_attention[0].band.band == HealthBandKey.CRITICAL

    def test_empty_portfolio(self):
        summary = summarize_portfolio_health([])
        assert summary.project_count == 0
        assert summary.average_health_score is None
        assert set(summary.band_counts.values()) == {0}
        assert summary.needs_attention == []


class TestPeriodStats:
    def test_totals(self):
        stats = calculate_period_stats(_portfolio())
        assert stats.total == 6
        assert stats.in_progress == 1
        assert stats.completed == 1
        assert stats.planning == 0
        assert stats.high_priority == 1
        assert stats.short_term == 2
        assert stats.long_term == 1
        assert stats.total_budget == 200_000
        assert stats.total_actual_costs == 190_000
        assert stats.total_npv == -22_000
        assert stats.budget_variance == 10_000
        assert stats.budget_variance_percentage == 5.0
        assert stats.completion_rate == 16.7
        assert stats.average_npv == -3_667

    def test_empty(self):
        stats = calculate_period_stats([])
        assert stats.total == 0
        assert stats.short_term == 0
        assert stats.completion_rate == 0
        assert stats.average_npv == 0
        assert stats.budget_variance_percentage == 0


class TestDateRanges:
    @pytest.mark.parametrize("period,start,end", [
        (TimePeriod.THIS_WEEK, date(2026, 10, 19), date(2026, 10, 25)),
        (TimePeriod.LAST_WEEK, date(2026, 10, 12), date(2026, 10, 18)),
        (TimePeriod.THIS_MONTH, date(2026, 10, 1), date(2026, 10, 31)),
        (TimePeriod.LAST_MONTH, date(2026, 9, 1), date(2026, 9, 30)),
        (TimePeriod.THIS_QUARTER, date(2026, 10, 1), date(2026, 12, 31)),
        (TimePeriod.LAST_QUARTER, date(2026, 7, 1), date(2026, 9, 30)),
        (TimePeriod.THIS_YEAR, date(2026, 1, 1), date(2026, 12, 31)),
        (TimePeriod.CUSTOM, date(2026, 10, 1), date(2026, 10, 31)),
    ])
    def test_windows(self, period, start, end):
        assert get_date_range_for_period(period, THURSDAY) == DateRange(start, end)

    def test_last_month_from_month_end(self):
        assert get_date_range_for_period("last_month", date(2026, 3, 31)) == DateRange(
            date(2026, 2, 1), date(2026, 2, 28)
        )

    def test_last_quarter_crosses_year(self):
        assert get_date_range_for_period("last_quarter", date(2026, 1, 15)) == DateRange(
            date(2025, 10, 1), date(2025, 12, 31)
        )

    def test_filter_keeps_dated_projects_in_range(self):
        window = get_date_range_for_period(TimePeriod.LAST_QUARTER, THURSDAY)
        kept = filter_projects_by_date_range(_portfolio(), window)
        assert [p.id for p in kept] == ["p2", "p3"]

    def test_labels(self):
        assert get_time_period_label(TimePeriod.THIS_QUARTER) == "This Quarter"
        custom = DateRange(date(2026, 1, 5), date(2026, 2, 10))
        assert get_time_period_label("custom", custom) == "Jan 05, 2026 - Feb 10, 2026"
        assert get_time_period_label("custom") == "Custom Range"

    def test_week_starting_today(self):
        monday = date(2026, 10, 19)
        assert get_date_range_for_period(TimePeriod.THIS_WEEK, monday) == DateRange(
            monday, date(2026, 10, 25)
        )

    def test_custom_range_used_when_given(self):
        march = DateRange(date(2026, 3, 1), date(2026, 3, 31))
        assert get_date_range_for_period(TimePeriod.CUSTOM, THURSDAY, march) == march

    def test_custom_range_ignored_for_named_periods(self):
        march = DateRange(date(2026, 3, 1), date(2026, 3, 31))
        assert get_date_range_for_period(TimePeriod.THIS_MONTH, THURSDAY, march) == DateRange(
            date(2026, 10, 1), date(2026, 10, 31)
        )


class TestScaleFilter:
    def test_filters_by_term(self):
        assert [p.id for p in filter_projects_by_scale(_portfolio(), ProjectScale.SHORT_TERM)] == ["p1", "p3"]
        assert [p.id for p in filter_projects_by_scale(_portfolio(), "Long-term")] == ["p2"]

    def test_unscaled_projects_never_match(self):
        kept = filter_projects_by_scale(_portfolio(), ProjectScale.MEDIUM_TERM)
        assert [p.id for p in kept] == ["p6"]

    def test_unknown_scale(self):
        with pytest.raises(ValueError):
            filter_projects_by_scale(_portfolio(), "Mid-term")
